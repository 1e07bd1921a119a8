"""
Entity resolver service.
"""
