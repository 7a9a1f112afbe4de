"""AI package - providers, prompts, intent routing and reply normalization."""
