"""Gossip protocol — flood resources, then flood the best known combination."""

from dsro.core.gossip.agent import GossipAgent, GossipState

__all__ = ["GossipAgent", "GossipState"]
