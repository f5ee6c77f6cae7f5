# Copyright 2018 Google LLC
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

# Test vectors are stored as JSON; a byte string under key "k" is written
# as a hex string under key "k_hex".

import json

_SUFFIX = "_hex"

def recursive_hex(o):
    if isinstance(o, dict):
        res = {}
        for k, v in o.items():
            if k.endswith(_SUFFIX):
                raise Exception(f"Disallowed dict key {k}: keys ending {_SUFFIX} are reserved")
            if isinstance(v, (bytes, bytearray)):
                res[k + _SUFFIX] = v.hex()
            else:
                res[k] = recursive_hex(v)
        return res
    elif isinstance(o, (list, tuple)):
        return [recursive_hex(i) for i in o]
    elif isinstance(o, (bytes, bytearray)):
        raise Exception("Can't hex-encode bytes outside a dict")
    return o

def recursive_unhex(o):
    if isinstance(o, dict):
        return {(k[:-len(_SUFFIX)] if k.endswith(_SUFFIX) else k):
                (bytes.fromhex(v) if k.endswith(_SUFFIX) else recursive_unhex(v))
            for k, v in o.items()}
    elif isinstance(o, list):
        return [recursive_unhex(i) for i in o]
    return o

def write_using_hex(fn, it):
    fn.parent.mkdir(parents=True, exist_ok=True)
    with fn.open("w") as f:
        json.dump([recursive_hex(tv) for tv in it], f, indent=4)

def iter_unhex(fn):
    with fn.open() as f:
        for htv in json.load(f):
            yield recursive_unhex(htv)
