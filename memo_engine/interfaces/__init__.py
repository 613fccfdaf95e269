"""
Abstract interfaces for the memo engine.

These interfaces define the contracts that concrete implementations
must adhere to, following the Dependency Inversion Principle.

This package contains:
- Provider interfaces for storage adapters
- Repository interfaces for memo data access
- Service interfaces for search and calendar derivation
- The client interface
"""
