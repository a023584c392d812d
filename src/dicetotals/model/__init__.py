"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the widgets; QtCore is used only for QSettings storage.
It deals with the totals calculation, the dice state, profiles and I/O.
"""
