"""NiceGUI interface - thin visualization layer for the chat widget.

Responsibilities:
    - Floating launcher button that opens and closes the chat panel
    - Welcome block, message bubbles and typing indicator
    - Input field and send button gated by the controller

Contains no session logic. Subscribes to ChatSessionController and redraws.
"""
