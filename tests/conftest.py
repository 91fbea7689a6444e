# tests/conftest.py
import os
import sys

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# The Lambda runtime and the CLI import their siblings by bare module name.
sys.path.insert(0, os.path.join(ROOT_DIR, "lambdas", "archive_alarm"))
sys.path.insert(0, os.path.join(ROOT_DIR, "cli"))

# app.py reads these at import time.
os.environ.setdefault("ARCHIVE_BUCKET", "test-alarm-archive")
os.environ.setdefault("AWS_REGION", "us-east-1")
