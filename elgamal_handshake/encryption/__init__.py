from .elgamal_exchange import ElGamalExchange, Handshake, PrivateKey, PublicKey

__all__ = ["ElGamalExchange", "Handshake", "PrivateKey", "PublicKey"]
