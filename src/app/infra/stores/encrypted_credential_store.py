"""Credenciais em arquivo JSON criptografado com AES-GCM.

Cada token é gravado sob `credential_key(account_id)` como
base64(nonce + ciphertext + tag). A própria chave da entrada entra como
associated data, então copiar um valor para outra conta invalida o token.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import os
from pathlib import Path

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from app.domain.account import credential_key
from app.protocols.credential_store import CredentialStoreProtocol
from utils.errors import CredentialStoreError

logger = logging.getLogger(__name__)

KEY_SIZE = 32  # 256 bits
NONCE_SIZE = 12  # 96 bits (recomendado para GCM)


def generate_key() -> str:
    """Gera chave AES-256 em base64 para CREDENTIAL_STORE_KEY."""
    return base64.b64encode(AESGCM.generate_key(bit_length=KEY_SIZE * 8)).decode("ascii")


def _decode_key(key_b64: str) -> bytes:
    try:
        key = base64.b64decode(key_b64.strip(), validate=True)
    except (ValueError, binascii.Error) as exc:
        raise CredentialStoreError("Chave do credential store não é base64 válido") from exc
    if len(key) != KEY_SIZE:
        raise CredentialStoreError(f"Chave do credential store deve ter {KEY_SIZE} bytes")
    return key


class EncryptedFileCredentialStore(CredentialStoreProtocol):
    """Store de tokens persistente em arquivo local.

    Args:
        path: Arquivo JSON com as entradas criptografadas
        key_b64: Chave AES-256 em base64
    """

    def __init__(self, path: str | Path, key_b64: str) -> None:
        self._path = Path(path)
        self._aesgcm = AESGCM(_decode_key(key_b64))

    def lookup(self, account_id: str) -> str | None:
        key = credential_key(account_id)
        entry = self._read().get(key)
        if entry is None:
            return None
        try:
            raw = base64.b64decode(entry, validate=True)
            plaintext = self._aesgcm.decrypt(raw[:NONCE_SIZE], raw[NONCE_SIZE:], key.encode("utf-8"))
        except (ValueError, binascii.Error, InvalidTag) as exc:
            raise CredentialStoreError("Entrada de credencial corrompida") from exc
        return plaintext.decode("utf-8")

    def save(self, account_id: str, token: str) -> None:
        key = credential_key(account_id)
        nonce = os.urandom(NONCE_SIZE)
        encrypted = self._aesgcm.encrypt(nonce, token.encode("utf-8"), key.encode("utf-8"))
        entries = self._read()
        entries[key] = base64.b64encode(nonce + encrypted).decode("ascii")
        self._write(entries)

    def delete(self, account_id: str) -> bool:
        entries = self._read()
        if entries.pop(credential_key(account_id), None) is None:
            return False
        self._write(entries)
        return True

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise CredentialStoreError(f"Credential store ilegível: {self._path}") from exc
        if not isinstance(data, dict):
            raise CredentialStoreError("Credential store deve ser um objeto JSON")
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, entries: dict[str, str]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(entries, indent=2, sort_keys=True), encoding="utf-8")
            os.chmod(tmp_path, 0o600)
            tmp_path.replace(self._path)
        except OSError as exc:
            raise CredentialStoreError(f"Falha ao gravar credential store: {self._path}") from exc
        logger.debug("credential_store_written", extra={"entries": len(entries)})
