import os
import tempfile

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-portfolium")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PORTFOLIUM_HOME", tempfile.mkdtemp(prefix="portfolium-test-"))
