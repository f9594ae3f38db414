""" Resource accounting and placement engine. """
