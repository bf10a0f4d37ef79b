"""
The CONTROLLER layer translates pointer input into graph edits and drives
playback. It uses Qt signals to notify any view of changes, but owns no widgets.
"""
