"""
Embedding and vector similarity collaborators.

Import from the submodules directly: `service` pulls in sentence-transformers
and ChromaDB, `models` has no third-party imports.
"""
