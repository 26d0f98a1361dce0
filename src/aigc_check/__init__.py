"""aigc-check — explainable detection of machine-generated text."""

__version__ = "0.1.0"
