"""URL templates — double-curly placeholders over a safe path language.

Keys are checked with navkit's own path-expression parser; filtered
output is rendered through kida, so any registered kida filter can
shape a placeholder's value.
"""
