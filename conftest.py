"""Global pytest configuration."""

import os

# Keep tests offline: no hosted generation, no weather API key, no local assets
os.environ.setdefault("PACKPAL_HF_API_TOKEN", "")
os.environ.setdefault("PACKPAL_OPENWEATHER_API_KEY", "")
os.environ.setdefault("PACKPAL_VOCAB_PATH", "/nonexistent/vocab.txt")
os.environ.setdefault("PACKPAL_EMBEDDING_MODEL_PATH", "/nonexistent/encoder.onnx")
