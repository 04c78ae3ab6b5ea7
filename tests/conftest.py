"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of scriptscope modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("scriptscope"):
        del sys.modules[module_name]

from scriptscope.parsing.pool import reset_parser_pool  # noqa: E402
from scriptscope.service import reset_parse_cache  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_singletons() -> Generator[None, None, None]:
    """Every test starts with a fresh parser pool and parse cache."""
    reset_parser_pool()
    reset_parse_cache()
    yield
    reset_parser_pool()
    reset_parse_cache()
