"""Token table, grammar templates, concrete syntax trees and a toy register machine for a small C-like language."""

__version__ = "0.1.0"