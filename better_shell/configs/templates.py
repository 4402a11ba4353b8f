"""
Configuration file templates written after installation.
"""

ZSHRC = """\
# Generated by better-shell
export ZSH="$HOME/.oh-my-zsh"

# Antigen plugin manager
source "$HOME/antigen.zsh"
antigen use oh-my-zsh
antigen bundle git
antigen bundle z
antigen bundle zsh-users/zsh-autosuggestions
antigen bundle zsh-users/zsh-syntax-highlighting
antigen bundle zsh-users/zsh-completions
antigen theme robbyrussell
antigen apply

# History
HISTSIZE=100000
SAVEHIST=100000
HISTFILE="$HOME/.zsh_history"
setopt HIST_IGNORE_ALL_DUPS SHARE_HISTORY

# fzf (Ctrl+R history search)
[ -f "$HOME/.fzf.zsh" ] && source "$HOME/.fzf.zsh"
command -v fzf >/dev/null && source <(fzf --zsh 2>/dev/null)

# eza
if command -v eza >/dev/null; then
  alias lsx='eza --icons --git -la'
fi

# carapace completions
if command -v carapace >/dev/null; then
  export CARAPACE_BRIDGES='zsh,fish,bash,inshellisense'
  source <(carapace _carapace)
fi

# asdf
[ -f "$HOME/.asdf/asdf.sh" ] && . "$HOME/.asdf/asdf.sh"
fpath=(${ASDF_DIR:-$HOME/.asdf}/completions $fpath)
autoload -Uz compinit && compinit

# Local overrides
[ -f "$HOME/.zshrc.local" ] && source "$HOME/.zshrc.local"
"""

TMUX_CONF = """\
# Generated by better-shell
set -g default-terminal "tmux-256color"
set -ga terminal-overrides ",*256col*:Tc"
set -g mouse on
set -g history-limit 50000
set -g base-index 1
setw -g pane-base-index 1
set -g renumber-windows on

# Split panes with | and -
bind | split-window -h -c "#{pane_current_path}"
bind - split-window -v -c "#{pane_current_path}"

# Plugins (prefix + I to install)
set -g @plugin 'tmux-plugins/tpm'
set -g @plugin 'tmux-plugins/tmux-sensible'
set -g @plugin 'tmux-plugins/tmux-resurrect'
set -g @plugin 'tmux-plugins/tmux-continuum'
set -g @plugin 'janoamaral/tokyo-night-tmux'
set -g @continuum-restore 'on'

run '~/.tmux/plugins/tpm/tpm'
"""

# Dotfile name (relative to home) -> content
CONFIG_FILES = {
    ".zshrc": ZSHRC,
    ".tmux.conf": TMUX_CONF,
}
