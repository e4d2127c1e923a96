"""Language-server building blocks for the Nix expression language."""

__version__ = "0.1.0"