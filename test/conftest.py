def pytest_configure(config):
    config.addinivalue_line("markers",
                            "examples: runs the example scripts (slow).")
