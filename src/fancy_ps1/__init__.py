"""
Powerline-style bash/zsh prompt

``fancy-ps1`` sets up a colorful, information-dense command prompt for Bash
and zsh: the user, the host, the current directory, and the current Git
branch, drawn as a chain of colored segments joined by arrow glyphs.

Features:

- Shortens the current directory path by abbreviating its leading components
  when it gets too long
- Shows the current Git branch, if any
- Colors, text effects, and visible segments are set in a simple
  configuration file
- Supports both Bash and zsh
- The prompt template is built once per session; only the working directory
  and branch are recomputed before each prompt

Add ``eval "$(fancy-ps1 --bash init)"`` to ``~/.bashrc`` (or ``eval
"$(fancy-ps1 --zsh init)"`` to ``~/.zshrc``) to use it.
"""

__version__ = "0.1.0"
__license__ = "MIT"
