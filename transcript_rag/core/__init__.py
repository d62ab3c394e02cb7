"""Core of transcript-rag: domain models, ports and services."""
