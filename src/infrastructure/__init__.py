"""Infrastructure adapters: persistence, settings, logging, exporters."""
