# bkutil

A collection of small helpers for back-end services:

- `bkutil.keys`: cache key types (`StringKey`, `IntKey`, `Int64Key`, `UintKey`, `Uint64Key`). Each one gives its cache key string through `key()`. The integer keys check their value's type and range.
- `bkutil.memory_backend`: `MemoryBackend`, a thread-safe TTL store with per-entry expiration. Durations are seconds or `timedelta`s. It can add a random extra expiration to each entry, and `cleanup()` sweeps out expired entries.
- `bkutil.memory_cache`: `BaseCache`, a read-through cache over a backend.
  - A miss calls your retrieve function and stores the result. Concurrent misses on the same key share one retrieval.
  - A failed retrieval raises its error, and that error is cached for five seconds.
  - `get_string`, `get_bool`, `get_int`, `get_float` and `get_time` raise `TypeError` when the value has another type.
  - `new_cache` and `new_mock_cache` build one for you.
- `bkutil.conv`: `to_int64`, `to_string`, `to_slice`, `string_to_bytes` and `bytes_to_string`.
- `bkutil.stringx`: `md5_hash`, `truncate` and `random_string`.
- `bkutil.aes_gcm`: `AESGcm`, AES-128/256 in GCM mode with a fixed 12-byte nonce. A wrong key or nonce length raises `InvalidKeyError` or `InvalidNonceError`.
- `bkutil.errorx`: `wrap` and `wrapf` attach a `[Layer:Function] message` context to an exception as an `Errorx`. The helpers `is_error` and `unwrap` walk the chain of wrapped exceptions.
- `bkutil.sets`: `StringSet`, `Int64Set` and `split_string_to_set`. The sets keep insertion order.
- `bkutil.loggers`: a process-wide registry of named loggers with aliases. A `NoopLogger` is the default.
- `bkutil.log_adapter`: `StreamLogger`, a levelled logger that writes plain lines to a text stream, with `set_logger` and `ensure_default_logger` to register one.

## Installation

```
pip install bkutil
```

## Examples

### Read-through cache

```python
from bkutil.keys import StringKey
from bkutil.memory_cache import new_cache

def retrieve(key):
    return load_user_from_database(key.key())

users = new_cache("users", False, retrieve, 300, None)
name = users.get_string(StringKey("alice"))
```

### Wrapping errors with context

```python
from bkutil.errorx import wrapf, new_layer_function_error_wrapf

try:
    count_members(kind, ident)
except Exception as exc:
    raise wrapf(exc, "ServiceLayer", "GetMemberCount", "count kind=`%s` fail", kind)

error_wrapf = new_layer_function_error_wrapf("ServiceLayer", "BulkDelete")
```

### AES-GCM

```python
import os
from bkutil.aes_gcm import AESGcm

cipher = AESGcm(os.urandom(32), os.urandom(12))
sealed = cipher.encrypt(b"payload")
assert cipher.decrypt(sealed) == b"payload"
```

### Named loggers

```python
import sys
from bkutil import loggers
from bkutil.log_adapter import set_logger
from bkutil.loggers import Level

set_logger("app", sys.stderr, Level.INFO)
loggers.set_alias("app", "api", "worker")
loggers.get_logger("api").info("started", {"port": 8000})
```

## What it does not do

- The cache lives in the memory of one process; there is no shared or persistent backend, though any `Backend` subclass can be plugged into `BaseCache`.
- The logger registry holds any object with `trace`/`debug`/`info`/`warn`/`error` methods, but the only loggers provided are `NoopLogger` and `StreamLogger`; there are no bridges to other logging libraries.

## Running the tests

```
pip install -e ".[test]"
pytest
```