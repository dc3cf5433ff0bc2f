"""
meetingfinder - find windows in a working day where every attendee is free.
"""

__version__ = "0.1.0"
