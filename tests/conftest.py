pytest_plugins = ["forklens.testing.conftest"]
