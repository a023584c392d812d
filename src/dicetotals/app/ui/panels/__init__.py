"""Side panels of the main window. Each panel reads from and writes to the Session."""
