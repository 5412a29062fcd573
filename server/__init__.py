"""FlowForge HTTP server."""

from dotenv import load_dotenv

load_dotenv()  # before any server module reads its environment
