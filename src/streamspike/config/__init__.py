"""Configuration: section models, file discovery, unified settings, logging."""
