"""Domain layer for dealdesk: marketplace rule engines and the services around them.

The rule engines (fees, escrow, reputation, matching) are pure functions over
domain entities. The services wire them to a Database implementation.
"""
