"""
Clients for the package feed: service index, search and archive download.
"""
