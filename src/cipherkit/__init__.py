"""
cipherkit: криптографические примитивы с паролем и ключами в PEM.
EN: Crypto primitives helper layer: hashing, password-based key derivation,
AES/DES block ciphers with explicit IV policies, RSA-OAEP, RSA signatures,
byte comparison and text codecs.
"""

from cipherkit.algorithms.asymmetric import (
    RSACipher,
    SessionKeyPair,
    get_asymmetric_algorithm,
    load_private_key,
    load_public_key,
    max_payload_size,
    valid_rsa_key_sizes,
)
from cipherkit.algorithms.hashing import (
    MD5Hash,
    SHA1Hash,
    SHA256Hash,
    SHA384Hash,
    SHA512Hash,
    get_hash_algorithm,
    hash_text,
)
from cipherkit.algorithms.kdf import derive_key, derive_key_for_digest
from cipherkit.algorithms.signing import RSASignatureEngine
from cipherkit.algorithms.symmetric import (
    AESCipher,
    DESCipher,
    EncryptedPayload,
    get_symmetric_algorithm,
)
from cipherkit.comparer import equal_by_digest, equal_bytes
from cipherkit.config import DEFAULT_CONFIG, CryptoConfig, KdfProfile
from cipherkit.core.exceptions import (
    AlgorithmNotFoundError,
    CryptoError,
    InvalidArgumentError,
    InvalidIVSizeError,
    InvalidKeyError,
    InvalidKeySizeError,
    InvalidParameterError,
    OperationFailedError,
)
from cipherkit.core.metadata import (
    AsymmetricAlgorithm,
    HashAlgorithm,
    IVPolicy,
    SymmetricAlgorithm,
    is_valid_rsa_key_size,
)
from cipherkit.core.result import OperationResult
from cipherkit.passwords import PasswordHasher
from cipherkit.service import AsymmetricCrypto, HashCrypto, SymmetricCrypto

__version__ = "1.0.0"

__all__ = [
    # Facades
    "HashCrypto",
    "SymmetricCrypto",
    "AsymmetricCrypto",
    # Hashing
    "MD5Hash",
    "SHA1Hash",
    "SHA256Hash",
    "SHA384Hash",
    "SHA512Hash",
    "get_hash_algorithm",
    "hash_text",
    # KDF
    "derive_key",
    "derive_key_for_digest",
    # Symmetric
    "AESCipher",
    "DESCipher",
    "EncryptedPayload",
    "get_symmetric_algorithm",
    # Asymmetric / signatures
    "RSACipher",
    "SessionKeyPair",
    "RSASignatureEngine",
    "get_asymmetric_algorithm",
    "load_public_key",
    "load_private_key",
    "max_payload_size",
    "valid_rsa_key_sizes",
    "is_valid_rsa_key_size",
    # Comparison
    "equal_bytes",
    "equal_by_digest",
    # Passwords
    "PasswordHasher",
    # Config & descriptors
    "CryptoConfig",
    "KdfProfile",
    "DEFAULT_CONFIG",
    "HashAlgorithm",
    "SymmetricAlgorithm",
    "AsymmetricAlgorithm",
    "IVPolicy",
    "OperationResult",
    # Errors
    "CryptoError",
    "InvalidArgumentError",
    "InvalidParameterError",
    "InvalidKeyError",
    "InvalidKeySizeError",
    "InvalidIVSizeError",
    "AlgorithmNotFoundError",
    "OperationFailedError",
]
