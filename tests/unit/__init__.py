"""
Unit tests for tableqa.

Test individual components in isolation:
- Table builder (header handling, ragged rows, duplicate headers, malformed CSV)
- Data models (defaults, null handling, immutability)
- Connectors (payload encoding, error classification, decoding) over stub transports
- httpx transport (timeouts, network errors, cancellation) over httpx.MockTransport
- Configuration and CLI
"""
