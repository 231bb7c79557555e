"""dotman - link the files of a dotfiles repository into your home directory."""

__version__ = "0.3.0"
