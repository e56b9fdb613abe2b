"""Root pytest configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables before tests run
_root = Path(__file__).parent
load_dotenv(_root / ".env")
load_dotenv(_root / ".env.local", override=True)

# Session tokens in tests are signed with a throwaway secret
os.environ.setdefault("JWT_SECRET", "test-secret")
