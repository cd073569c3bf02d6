import inspect

from vizharness import pytest_plugin


def test_plugin_exposes_harness_fixtures():
    for name in ["harness_settings", "harness_browser", "harness_page", "harness"]:
        assert hasattr(pytest_plugin, name)


def test_harness_fixture_teardown_closes():
    source = inspect.getsource(pytest_plugin)

    assert "harness.close()" in source


def test_plugin_enabled_from_conftest(request):
    assert request.config.pluginmanager.has_plugin("vizharness.pytest_plugin")
