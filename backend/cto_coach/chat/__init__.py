"""Chat sessions, prompt assembly and question answering."""
