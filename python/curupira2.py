# Copyright 2018 Google LLC
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

import cipher

# Curupira-2: 96-bit block, 96/144/192-bit keys. The state is a 3x4 byte
# matrix stored column by column.

_P = [0x3, 0xF, 0xE, 0x0, 0x5, 0x4, 0xB, 0xC, 0xD, 0xA, 0x9, 0x6, 0x7, 0x8, 0x2, 0x1]
_Q = [0x9, 0xE, 0x5, 0x6, 0xA, 0x2, 0x3, 0xC, 0xF, 0x0, 0x4, 0xD, 0x7, 0xB, 0x1, 0x8]

def _mix_nibbles(h, l):
    return (h & 0xc) ^ ((l >> 2) & 0x3), ((h << 2) & 0xc) ^ (l & 0x3)

def _make_sbox(u):
    h, l = _mix_nibbles(_P[u >> 4], _Q[u & 0xf])
    h, l = _mix_nibbles(_Q[h], _P[l])
    return (_P[h] << 4) ^ _Q[l]

def _make_xtimes(u):
    # Multiplication by x modulo x^8 + x^6 + x^3 + x^2 + 1
    u <<= 1
    if u & 0x100:
        u ^= 0x14d
    return u

sbox = [_make_sbox(u) for u in range(256)]
xtimes = [_make_xtimes(u) for u in range(256)]

# Nonlinear layer combined with the row permutation
_pi = [0, 4, 8, 3, 1, 11, 6, 10, 2, 9, 7, 5]

# Ciphertext is emitted row by row
_to_rows = [0, 3, 6, 9, 1, 4, 7, 10, 2, 5, 8, 11]
_from_rows = [0, 4, 8, 1, 5, 9, 2, 6, 10, 3, 7, 11]

def _t0(v):
    return ((v << 5) ^ (v << 3)) & 0xff

def _t1(v):
    return v ^ (v >> 3) ^ (v >> 5)

def _gamma_pi(block):
    block[:] = bytes(sbox[block[p]] for p in _pi)

def _theta(block):
    for c in range(0, 12, 3):
        a = xtimes[block[c] ^ block[c + 1] ^ block[c + 2]]
        b = xtimes[a]
        block[c] ^= a
        block[c + 1] ^= b
        block[c + 2] ^= a ^ b

class KeySizeError(cipher.CipherError):
    def __init__(self, size):
        self.size = size
        super().__init__(f"Curupira2: invalid key size {size}")

class Curupira2(cipher.Blockcipher):
    def __init__(self):
        super().__init__()
        self._key_enc = None
        self.choose_variant(lambda v: True)

    def variant_name(self):
        return "{}_{}".format(self.name(), self.lengths()['key'] * 8)

    def variants(self):
        for kl, rounds in [(12, 10), (18, 12), (24, 14)]:
            yield {
                'cipher': 'Curupira2',
                'rounds': rounds,
                'lengths': {
                    'block': 12,
                    'key': kl
                }
            }

    def block_bits(self):
        return cipher.BLOCK_BITS

    def make_key(self, key, key_bits=None):
        if key_bits is not None:
            key = key[:key_bits // 8]
        if len(key) not in (12, 18, 24):
            raise KeySizeError(len(key))
        self.set_keylen(len(key))
        self._last = len(key) - 1
        self._key_enc = bytes(key)
        k = bytearray(key)
        msb = 0
        for _ in range(self.variant['rounds']):
            msb = self._next_key(k, msb, False)
        self._key_dec = bytes(k)

    def _next_pos(self, pos):
        return 0 if pos == self._last else pos + 1

    def _next_key(self, key, msb, decrypting):
        if decrypting:
            msb = self._last if msb == 0 else msb - 1
            aux = key[msb]
            key[msb] ^= sbox[msb]
        else:
            key[msb] ^= sbox[msb]
            aux = key[msb]
        p = self._last if msb == 0 else msb - 1
        key[p] ^= _t0(aux)
        p = self._last if p == 0 else p - 1
        key[p] ^= _t1(aux)
        if not decrypting:
            msb = self._next_pos(msb)
        return msb

    def _add_key(self, block, key, msb):
        pos = msb
        for i in range(12):
            block[i] ^= sbox[key[pos]] if i % 3 == 0 else key[pos]
            pos = self._next_pos(pos)

    def _keyed_theta(self, block, key, msb, decrypting):
        pos = msb
        for c in range(0, 12, 3):
            k0 = sbox[key[pos]]
            pos = self._next_pos(pos)
            a = block[c] ^ block[c + 1] ^ block[c + 2]
            if decrypting:
                a ^= k0 ^ key[pos] ^ key[self._next_pos(pos)]
            a = xtimes[a]
            b = xtimes[a]
            block[c] ^= a ^ k0
            block[c + 1] ^= b ^ key[pos]
            pos = self._next_pos(pos)
            block[c + 2] ^= a ^ b ^ key[pos]
            pos = self._next_pos(pos)

    def _crypt(self, block, decrypting):
        if self._key_enc is None:
            raise cipher.InvalidSequence("Curupira2: no key set")
        assert len(block) == 12
        rounds = self.variant['rounds']
        if decrypting:
            key, msb = bytearray(self._key_dec), rounds
        else:
            key, msb = bytearray(self._key_enc), 0
        block = bytearray(block)
        self._add_key(block, key, msb)
        for r in range(1, rounds + 1):
            _gamma_pi(block)
            msb = self._next_key(key, msb, decrypting)
            if r == rounds:
                self._add_key(block, key, msb)
            else:
                self._keyed_theta(block, key, msb, decrypting)
        return block

    def encrypt_block(self, block):
        ct = self._crypt(block, False)
        return bytes(ct[p] for p in _to_rows)

    def decrypt_block(self, block):
        assert len(block) == 12
        return bytes(self._crypt(bytes(block[p] for p in _from_rows), True))

    def sct(self, block):
        """Square-Complete Transform: four unkeyed rounds."""
        assert len(block) == 12
        block = bytearray(block)
        for _ in range(4):
            _gamma_pi(block)
            _theta(block)
        return bytes(block)

    def encrypt(self, pt, key):
        self.make_key(key)
        return self.encrypt_block(pt)

    def decrypt(self, ct, key):
        self.make_key(key)
        return self.decrypt_block(ct)
