# どこで: `src/noisesketch/__init__.py`。
# 何を: ルート `noisesketch` パッケージを定義する。
# なぜ: import 起点を `noisesketch` に統一するため。

from __future__ import annotations

from noisesketch.api import run
from noisesketch.core.settings import Settings
from noisesketch.sketches import create_sketch

__all__ = ["Settings", "create_sketch", "run"]
