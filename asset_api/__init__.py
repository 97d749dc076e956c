"""
Hyperledger Fabric Asset Transfer API

A REST façade over the asset-transfer contract on a permissioned ledger.
"""

__version__ = "1.0.0"
