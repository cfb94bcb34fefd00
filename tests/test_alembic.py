"""
test_alembic.py — Verify Alembic migration setup and structure.

Checks the baseline migration against the model metadata and env.py
configuration without a live database.

Called by: pytest
Depends on: alembic/, app.models
"""

import importlib.util
import inspect
from pathlib import Path

from app.models import Base

ROOT = Path(__file__).parent.parent
MIGRATION_DIR = ROOT / "alembic" / "versions"


def _load_baseline():
    files = sorted(MIGRATION_DIR.glob("*.py"))
    assert len(files) >= 1, "No migration files found"
    spec = importlib.util.spec_from_file_location("baseline_migration", files[0])
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def test_baseline_has_required_attributes():
    mod = _load_baseline()
    for attr in ("revision", "down_revision", "upgrade", "downgrade"):
        assert hasattr(mod, attr)
    assert mod.down_revision is None, "Baseline migration should have no parent"


def test_baseline_creates_every_model_table():
    up_src = inspect.getsource(_load_baseline().upgrade)
    for table in Base.metadata.tables:
        assert f'"{table}"' in up_src, f"{table} missing from baseline migration"


def test_downgrade_drops_every_model_table():
    down_src = inspect.getsource(_load_baseline().downgrade)
    for table in Base.metadata.tables:
        assert f'drop_table("{table}")' in down_src


def test_env_py_imports_all_models():
    content = (ROOT / "alembic" / "env.py").read_text()
    assert "from app.models import Base" in content
    assert "settings.database_url" in content
