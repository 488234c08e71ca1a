"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Multi-tenant restaurant point-of-sale and table management service.
"""

__version__ = "1.0.0"
