"""
NBA vectors.

Builds TF-IDF sparse vectors over NBA game, player, schedule and injury
records and uploads them, with their raw text, to a dense and a sparse
Pinecone index.
"""

__version__ = "0.1.0"
