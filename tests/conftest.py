"""Root conftest — shared test configuration."""

import os
import tempfile

# Tests never talk to a real database, Graph tenant, or the repo's uploads folder
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="crm-uploads-"))
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.pop("OUTLOOK_ACCESS_TOKEN", None)
os.environ.pop("OUTLOOK_CONNECTOR_HOSTNAME", None)
