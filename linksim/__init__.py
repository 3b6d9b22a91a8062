"""
linksim - data-link layer protocol simulator.

Two machines exchange frames over a channel that may drop them. Protocol
drivers (unconfirmed transmission, stop-and-wait) are written against the
abstract channel contract and work with every loss model.
"""

__version__ = "0.1.0"
