"""Domain layer for ledgerflow application.

Pure core functions live in extraction, classification, statement,
consistency and line_editor; services built on the Database port live in
client, global_model, lines, statements and document_import.
"""
