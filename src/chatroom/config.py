# src/chatroom/config.py
import os

HOST = os.environ.get("CHAT_HOST", "0.0.0.0")
PORT = int(os.environ.get("CHAT_PORT", "6667"))

# 비어 있으면 파일 로그를 남기지 않음
LOG_LEVEL = os.environ.get("CHAT_LOG_LEVEL", "DEBUG").upper()
LOG_FILE = os.environ.get("CHAT_LOG_FILE", "")

RECV_SIZE = 4096
ENCODING = "utf-8"
LINE_END = "\r\n"
SERVER_NAME = "server"
