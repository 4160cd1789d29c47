"""Core building blocks: embeddings, similarity, text utilities and note storage."""
