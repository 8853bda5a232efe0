"""pagebind - JSON content projected into static HTML through declarative markers."""

__version__ = "0.1.0"
