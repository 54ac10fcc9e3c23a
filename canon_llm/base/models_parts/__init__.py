"""One-class-per-file model implementations; import via ``canon_llm.base.models``."""
