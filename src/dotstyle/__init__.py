"""dotstyle: run dotnet format and CSharpier over a source tree."""

__version__ = "0.1.0"
