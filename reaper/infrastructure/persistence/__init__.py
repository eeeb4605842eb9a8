"""SQL persistence: engine, models, repositories and migrations."""
