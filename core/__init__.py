"""Invoice calculation core: models, engine and services."""
