"""
🚀 genopt Launcher
"""
