"""rbridge - notebook interpreter that renders R code through Rserve and rmarkdown.

Architecture:
- session/: Rserve connection, remote command templates, bootstrap
- rendering/: R Markdown render pipeline and HTML fragment cleanup
- completion/: variable and function completion from the live session
- interpreter/: host-facing interpreters, scheduler and registry
"""

__version__ = "0.1.0"
