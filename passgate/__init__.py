"""
Passgate - Pluggable password login modules

Authenticates users by login name, login domain and password inside a chain
of login modules, then attaches the user's principals to the subject.

Architecture:
- Each module is self-contained with clear interfaces
- Identity store access and password verification are injected
- No module knows the internals of another

Modules:
- auth: Login modules, login context and factory
- config: Login configuration files
"""

__version__ = "1.0.0"
