"""
Line-based TCP chat server.

Each accepted socket gets a ClientHandler thread. The handlers share one
ServerModel; rendered notifications are routed back to the sockets of
their recipients by nickname.
"""
import argparse
import socket
import threading

from chatroom import config
from chatroom.core.errors import ChatError
from chatroom.core.handler import ClientHandler
from chatroom.core.server_model import ServerModel
from chatroom.utils.logger import get_logger, set_level

logger = get_logger("Server")


class ChatServer:
    def __init__(self, model=None):
        self.model = model if model is not None else ServerModel()
        self.connections = {}  # conn_id -> ClientHandler
        self.lock = threading.Lock()

    def _next_conn_id(self):
        # 끊긴 연결의 id 는 재사용
        conn_id = 0
        while conn_id in self.connections:
            conn_id += 1
        return conn_id

    def accept(self, sock, addr):
        """Register a new socket; on failure close it and return None."""
        try:
            with self.lock:
                conn_id = self._next_conn_id()
                handler = ClientHandler(sock, addr, conn_id, self)
                self.connections[conn_id] = handler
        except ChatError as e:
            logger.error(f"Rejected connection from {addr}: {e}")
            try:
                sock.close()
            except OSError:
                pass
            return None
        return handler

    def deliver(self, notification):
        for nickname, lines in notification.render().items():
            conn_id = self.model.get_user_id(nickname)
            with self.lock:
                handler = self.connections.get(conn_id)
            if handler is None:
                logger.warning(f"No connection for {nickname}; dropped {len(lines)} line(s)")
                continue
            for line in lines:
                handler.send_message(line)

    def disconnect(self, conn_id):
        # id 는 모델에서 지워진 뒤에야 재사용 가능
        with self.lock:
            if conn_id not in self.connections:
                return
            notification = self.model.disconnect(conn_id)
            del self.connections[conn_id]
        self.deliver(notification)


def start_server(host=config.HOST, port=config.PORT, server=None):
    server = server if server is not None else ChatServer()
    server_sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server_sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    server_sock.bind((host, port))
    server_sock.listen(128)
    logger.info(f"Server running on {host}:{port}")

    try:
        while True:
            conn, addr = server_sock.accept()
            handler = server.accept(conn, addr)
            if handler is not None:
                handler.start()
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    finally:
        server_sock.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="In-memory line-based chat server")
    parser.add_argument("--host", default=config.HOST)
    parser.add_argument("--port", type=int, default=config.PORT)
    parser.add_argument("--log-level", default=config.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)
    set_level(args.log_level)
    start_server(args.host, args.port)


if __name__ == "__main__":
    main()
