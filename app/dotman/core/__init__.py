"""Core building blocks: errors, paths, platform detection and theming."""
