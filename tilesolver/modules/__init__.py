# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileSolver — Processing Modules
  preprocessing  input image validation
  extraction     grid geometry and tile cutting
  scoring        pairwise border cost tables
  search         beam search and exhaustive assignment
  mapping        mapping text codec
  rendering      solved image compositing
"""
