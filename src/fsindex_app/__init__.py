"""
FSIndex App - PyQt6 presentation adapters.

ViewModels and background workers that a Qt front end binds to. The
widgets themselves live with the embedding application.
"""
