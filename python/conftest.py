# Copyright 2018 Google LLC
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

import pytest

import curupira2

class IdentityCipher(object):
    """Stub 96-bit cipher whose encryption and SCT are both the identity.

    With it R and L are zero for every nonce, every offset stays zero and
    the keystream is all zeros, which leaves only the mode's own XORs,
    markers and lengths in the output.
    """
    def __init__(self, bits=96):
        self._bits = bits

    def block_bits(self):
        return self._bits

    def make_key(self, key, key_bits=None):
        pass

    def encrypt_block(self, block):
        return bytes(block)

    def sct(self, block):
        return bytes(block)

@pytest.fixture
def identity():
    return IdentityCipher()

@pytest.fixture(params=[12, 18, 24])
def keyed_curupira(request):
    c = curupira2.Curupira2()
    c.make_key(bytes.fromhex("0228674ed28f695ed88a39ec2b5c1a0f64e1d937a8b0c6e5")[:request.param])
    return c

@pytest.fixture
def stub_cipher():
    """The identity stub class, for tests that need another block size or a subclass."""
    return IdentityCipher
