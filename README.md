# pkiext

A small library with no dependencies for reading the extension fields of X.509
certificates and certificate revocation lists (CRLs) from DER-encoded data.
Everything lives in the module `pkiext.x509`.

## What it provides

- **`Reader(data)`**: a cursor over DER bytes.
  - `read_tag_and_value()` returns the next item as `(tag, value_bytes)`.
  - `expect_tag(tag)` reads the next item and returns its value. It raises
    `BadDer` if the item carries a different tag.
  - `read_bool()` reads an optional BOOLEAN. It returns `False` when the next
    item is not a BOOLEAN.
  - `at_end()` tells whether all input has been consumed.

  The reader accepts lengths of up to four bytes, and only in their minimal
  encoding. It rejects indefinite lengths and high tag numbers.
- **`Tag`**: an `IntEnum` of the universal tags. These are BOOLEAN, INTEGER,
  BIT_STRING, OCTET_STRING, NULL, OID, UTC_TIME, GENERALIZED_TIME, SEQUENCE and
  SET.
- **`Extension`**: a frozen dataclass with the fields `id`, `critical` and
  `value`. `Extension.from_der(reader)` parses the body of an
  `Extension ::= SEQUENCE { extnID, critical DEFAULT FALSE, extnValue }`.
  `extension.unsupported()` raises `UnsupportedCriticalExtension` when the
  extension is critical, and does nothing otherwise.
- **`remember_extension(extension, handler)`**: for a standard `id-ce`
  (2.5.29.x) extension, this calls `handler` with the last octet of the OID and
  returns the handler's result. Any other extension is passed to
  `unsupported()`, and the call returns `None`.
- **`set_extension_once(current, parser)`**: returns `parser()`. It raises
  `ExtensionValueInvalid` if `current` is not `None`, which means the extension
  has already been seen.
- **`parse_distribution_point_name(reader)`**: parses a CRL
  `DistributionPointName`. It returns one of two values:
  - `FullName(value)`, whose `general_names()` yields each general name as
    `(tag, raw_value)`;
  - `NameRelativeToCrlIssuer(value)`.

  Any other tag raises `BadDer`.

All parse failures raise a subclass of `DerError`: `BadDer`,
`UnsupportedCriticalExtension` or `ExtensionValueInvalid`.

## Installation

```
pip install pkiext
```

## Example

```python
from pkiext.x509 import Extension, Reader, remember_extension, set_extension_once

# Body of an Extension: OID 2.5.29.19 (basicConstraints), critical, empty value
body = bytes([0x06, 0x03, 0x55, 0x1D, 0x13, 0x01, 0x01, 0xFF, 0x04, 0x00])
ext = Extension.from_der(Reader(body))

seen = {}

def handle(last_octet):
    if last_octet == 19:
        seen["basic_constraints"] = set_extension_once(
            seen.get("basic_constraints"), lambda: ext.value
        )
    else:
        ext.unsupported()

remember_extension(ext, handle)
assert seen["basic_constraints"] == b""
```

## What it does not do

The package works only at the level of individual extensions and distribution
point names. It does not parse whole certificates or CRLs. It does not build or
verify certificate chains, check signatures, check validity times or revocation
status, or validate DNS names or IP addresses. General names inside a
`FullName` are returned as raw tag and value pairs and are not decoded further.

## Running the tests

```
pip install -e ".[test]"
pytest
```