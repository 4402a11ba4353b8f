"""
better-shell: one-command shell setup with zsh, oh-my-zsh, fzf, asdf, tmux, and more.
"""

__version__ = "1.0.0"
