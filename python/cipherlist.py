# Copyright 2018 Google LLC
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

import curupira2
import lettersoup
import marvin

all_ciphers = [
    curupira2.Curupira2(),
    marvin.MarvinMac(),
    lettersoup.LetterSoupAead(),
]
