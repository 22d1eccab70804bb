"""CSS styles for the charge console application."""

CSS = """
Screen {
    background: #1e1e2e;
}

Header {
    background: #181825;
    text-style: bold;
    padding: 0 1;
    height: 3;
}

#session-info {
    background: #181825;
    color: #a6adc8;
    padding: 0 2;
    height: 1;
    text-align: right;
    dock: top;
}

Footer {
    background: #181825;
    height: 2;
}

DataTable {
    background: #1e1e2e;
    border: solid #3b82f6;
}

DataTable.cursor {
    background: #3b82f6;
    color: #ffffff;
    text-style: bold;
}

#connectors-table {
    height: 1fr;
    margin: 1 1 0 1;
}

#users-table {
    height: 12;
    margin-top: 1;
}

Button {
    background: transparent;
    color: #3b82f6;
    border: none;
    height: 3;
    min-height: 3;
    min-width: 16;
    padding: 0 1;
    margin: 0;
    content-align: center middle;
}

Button:hover {
    background: #3b82f6;
    color: #ffffff;
    text-style: underline;
}

Button:focus {
    background: #3b82f6;
    color: #ffffff;
    text-style: bold underline reverse;
}

Button.-primary {
    background: #22d3ee;
    color: #0f172a;
    border: solid #22d3ee;
    text-style: bold;
}

Button.-primary:hover {
    background: #67e8f9;
}

Horizontal {
    height: auto;
    margin: 0 0 1 0;
    padding: 0 1;
}

#station-actions-row {
    height: 3;
    margin-top: 1;
}

#station-actions-row > Button {
    width: 20;
    min-width: 20;
}

#dialog-title {
    text-style: bold;
    color: #67e8f9;
    margin-bottom: 1;
    border-bottom: solid #22d3ee;
    padding-bottom: 0;
}

#dialog-message {
    color: #e2e8f0;
    margin-bottom: 1;
}

#user-selection-summary {
    color: #fbbf24;
    min-height: 1;
    margin-top: 1;
}

#loading-message {
    color: #fbbf24;
    padding: 1 2;
    border: solid #22d3ee;
    background: #181825;
    width: auto;
}

Label {
    color: #e2e8f0;
}

Input {
    background: #181825;
    border: solid #3b82f6;
    color: #e2e8f0;
    padding: 0 1;
    min-height: 1;
}

Static {
    color: #a6adc8;
}

ModalScreen {
    align: center middle;
}
"""
