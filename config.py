import os

# --- Configuration ---
HOST = os.environ.get("CALCULATOR_HOST", "0.0.0.0")  # 0.0.0.0 so the server is reachable inside Docker
PORT = int(os.environ.get("CALCULATOR_PORT", "8496"))
LOG_DIR = os.environ.get("CALCULATOR_LOG_DIR", "logs")
