#!/usr/bin/env python3

"""Defaults shared by the hdimount modules."""

def DefaultMessageHandler(msg):
    """ This will just eat messages sent to it. A good default for the message handler
        used by some of the class methods, in case the user doesn't care about them."""
    pass

class C_MounterDefaults:
    """This class abstracts the things the mounter needs to know about this computer"""
    def __init__(self):
        # Bare name, so it's looked up on the PATH like any other command
        self.HDIUtil = 'hdiutil'

    def HDIUtilPath(self):
        return self.HDIUtil
