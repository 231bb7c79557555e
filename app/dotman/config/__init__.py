"""Configuration layering for dotman.

Configuration comes from three sources, in order of precedence: command
line options, the dotrc file, and computed defaults. See
``dotman.config.merge`` for the merging rules.
"""
