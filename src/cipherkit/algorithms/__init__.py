"""Concrete algorithm implementations: hashing, KDF, block ciphers, RSA and signatures."""
