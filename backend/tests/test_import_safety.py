"""
test_import_safety.py — Module import and circular import checks.

Verifies that every bizops module imports cleanly in a fresh interpreter state
(only the module itself is imported; no server is started) and that the
engine modules do not pull in the web layer.

No network or external services are required.
"""

import importlib
import sys

import pytest

ENGINE_MODULES = [
    "bizops.config",
    "bizops.models.pricing_schema",
    "bizops.models.document_schema",
    "bizops.services.logging_config",
    "bizops.services.conversion_engine",
    "bizops.services.pricing_engine",
    "bizops.services.tax_engine",
    "bizops.services.totals_engine",
    "bizops.services.report_engine",
    "bizops.services.job_costing_engine",
]

WEB_MODULES = [
    "bizops.services.middleware",
    "bizops.api.pricing_routes",
    "bizops.api.report_routes",
    "bizops.main",
]


@pytest.fixture(autouse=True)
def _restore_modules():
    saved = {k: v for k, v in sys.modules.items() if k == "bizops" or k.startswith("bizops.")}
    yield
    for key in [k for k in sys.modules if k == "bizops" or k.startswith("bizops.")]:
        sys.modules.pop(key)
    sys.modules.update(saved)


def _fresh_import(name: str):
    for key in [k for k in sys.modules if k == "bizops" or k.startswith("bizops.")]:
        sys.modules.pop(key)
    return importlib.import_module(name)


class TestModuleImports:

    @pytest.mark.parametrize("name", ENGINE_MODULES + WEB_MODULES)
    def test_imports_cleanly(self, name):
        assert _fresh_import(name) is not None

    @pytest.mark.parametrize("name", ENGINE_MODULES)
    def test_engines_do_not_import_web_layer(self, name):
        _fresh_import(name)
        assert "bizops.api.pricing_routes" not in sys.modules
        assert "bizops.main" not in sys.modules
