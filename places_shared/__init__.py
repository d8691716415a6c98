"""
Data model and configuration schema shared by the applet runtime and its tests.
"""
