"""Adapters: Streamlit interface and command-line entry points."""

__all__ = []
