pytest_plugins = ["stubkit.plugin", "pytester"]
