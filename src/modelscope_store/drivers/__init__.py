"""Driver implementations."""

from modelscope_store.drivers._modelscope import ModelScopeDriver

__all__ = ["ModelScopeDriver"]
