"""Constants and configuration defaults for textpane."""

class ToolkitConstants:
    """Central configuration constants for the toolkit."""
    
    # Buffer storage
    FILLER = "\x00"  # Padding cell written when x exceeds the line length
    
    # Undo history
    MAX_HISTORY_ENTRIES = 500  # Oldest entries are dropped beyond this
    UNDO_MARKER = "     - UNDO -"
    REDO_MARKER = "     - REDO -"
    END_MARKER = "     -      -"
    ELLIPSIS = "..."
    
    # Cross-thread work queue
    WORK_QUEUE_SIZE = 20  # Bounded FIFO between producers and the UI thread
    INPUT_POLL_TIMEOUT = 0.05  # Seconds the input pump waits per read
    
    # Demo host
    MAIN_VIEW = "main"
    HISTORY_VIEW = "history"
    HISTORY_PANEL_WIDTH = 30  # Columns reserved for the history panel
    MIN_TERMINAL_WIDTH = 40
    TERMINAL_TOO_NARROW_MESSAGE = "Terminal too narrow! Need at least {} columns."
