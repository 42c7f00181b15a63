# src/chatroom/core/handler.py
import threading

from chatroom import config
from chatroom.core.errors import ParseError
from chatroom.core.notification import Notification
from chatroom.core.parser import IRCParser, build_command
from chatroom.utils.logger import get_logger

logger = get_logger("Handler")


class ClientHandler(threading.Thread):
    """One thread per connection: read lines, run commands, hand results back."""

    def __init__(self, sock, addr, conn_id, server):
        super().__init__(daemon=True)
        self.sock = sock
        self.addr = addr
        self.conn_id = conn_id
        self.server = server
        self.running = True
        self.send_lock = threading.Lock()
        # 접속 즉시 모델에 등록 (User<N> 닉네임 부여)
        self.nickname = server.model.connect(conn_id)

    def run(self):
        logger.info(f"Connected: {self.addr} as {self.nickname}")
        self.server.deliver(Notification.connected(self.nickname))
        buffer = b""
        line_end = config.LINE_END.encode(config.ENCODING)
        while self.running:
            try:
                data = self.sock.recv(config.RECV_SIZE)
                if not data:
                    break

                # 완성된 줄 단위로만 디코딩 (멀티바이트 문자가 잘려 들어올 수 있음)
                buffer += data

                while line_end in buffer:
                    raw, buffer = buffer.split(line_end, 1)
                    if not raw:
                        continue
                    self.handle_line(raw.decode(config.ENCODING, errors="replace"))
                    if not self.running:
                        break

            except ConnectionResetError:
                break
            except Exception as e:
                logger.error(f"Error handling client {self.addr}: {e}")
                break

        self.cleanup()

    def handle_line(self, line):
        _, verb, params = IRCParser.parse(line)
        if verb is None:
            return
        logger.debug(f"Received from {self.nickname}: {line}")

        if verb == "QUIT":
            self.running = False
            return
        if verb == "PING":
            self.send_message(f"PONG {params[0]}" if params else "PONG")
            return

        self.nickname = self.server.model.get_nickname(self.conn_id)
        try:
            command = build_command(self.conn_id, self.nickname, verb, params, line)
        except ParseError as e:
            logger.warning(f"Rejected line from {self.nickname}: {line!r} ({e.reason})")
            self.send_message(IRCParser.build_msg(
                f":{config.SERVER_NAME}", e.code, self.nickname, verb, e.reason))
            return

        notification = self.server.model.process(command)
        self.nickname = self.server.model.get_nickname(self.conn_id)
        self.server.deliver(notification)

    def send_message(self, msg):
        try:
            with self.send_lock:
                self.sock.sendall(f"{msg}{config.LINE_END}".encode(config.ENCODING))
        except OSError as e:
            logger.error(f"Send error to {self.nickname}: {e}")

    def cleanup(self):
        logger.info(f"Disconnected: {self.addr}")
        self.running = False
        self.server.disconnect(self.conn_id)
        try:
            self.sock.close()
        except OSError:
            pass
