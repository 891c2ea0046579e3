"""HTTP routes driving the plugin hooks the way the host platform does."""
