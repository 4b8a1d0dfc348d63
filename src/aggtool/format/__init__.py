"""AGG/ICN binary layouts and codecs."""
