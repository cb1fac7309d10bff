"""Interfaces for pluggable wallet backends."""

from web3_quarters.interfaces.signer import BaseSigner

__all__ = ["BaseSigner"]
