"""Cross‑cutting infrastructure: settings, logging, database, security, errors."""
