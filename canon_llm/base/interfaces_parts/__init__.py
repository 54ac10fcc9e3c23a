"""One-protocol-per-file interface definitions; import via ``canon_llm.base.interfaces``."""
