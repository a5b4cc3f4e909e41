# applinkverify

`applinkverify` checks whether a web host vouches for an app. It reads the
host's applinking asset file and compares the apps listed there with the
app's identity. It also keeps per-host results and decides when a host that
failed may be checked again.

## Installation

```
pip install applinkverify
```

To run the tests:

```
pip install "applinkverify[test]"
pytest
```

## The asset file

A host publishes its file at `/.well-known/applinking.json`.
`applinkverify.models.asset_url` builds that address from a host URI:

```python
from applinkverify.models import asset_url

asset_url("https://www.example.com")
# 'https://www.example.com/.well-known/applinking.json'
```

The file looks like this:

```json
{
  "applinking": {
    "apps": [
      {"appIdentifier": "1234", "bundleName": "com.example.app", "fingerprint": "AB:CD"}
    ]
  }
}
```

`applinkverify.json_util.parse_asset_json` turns the text into an
`AssetJsonObj`. It raises `AssetJsonError`, a subclass of `ValueError`, in
these cases:

- the text is empty
- the text is not JSON
- the text is not a JSON object
- the object has no `applinking` object
- the `applinking` object has no `apps` array

A field of an app entry that is missing, or that is not a string, is read as
an empty string.

```python
from applinkverify.json_util import parse_asset_json, AssetJsonError

asset = parse_asset_json(text)
for app in asset.applinking.apps:
    print(app.app_identifier, app.bundle_name, app.fingerprint)
```

## Verifying a host

`applinkverify.domain_verifier.verify_host` takes an HTTP status code, the
response body and the app's identity (`AppVerifyBaseInfo`). It returns an
`InnerVerifyStatus`:

```python
from applinkverify.models import AppVerifyBaseInfo
from applinkverify.domain_verifier import verify_host

info = AppVerifyBaseInfo(
    app_identifier="1234",
    bundle_name="com.example.app",
    fingerprint="AB:CD",
)
status = verify_host(200, body, info)
```

`status_from_http_error` classifies any status code other than 200 by range:

| Code | Status |
| --- | --- |
| 300–399 | `FAILURE_REDIRECT` |
| 400–499 | `FAILURE_CLIENT_ERROR` |
| 500 and up | `FAILURE_REJECTED_BY_SERVER` |
| anything else | `FAILURE_HTTP_UNKNOWN` |

With a 200 response, a body that cannot be parsed gives `STATE_FAIL`.
Otherwise the app is first matched by app identifier
(`verify_with_app_identifier`):

- A listed app with the same identifier succeeds, unless its bundle name or
  its fingerprint conflicts with the app's own. A value conflicts only when
  both sides are non-empty and they differ.
- A listed app with a different identifier but the same bundle name fails.

If no decision comes from that step (`UNKNOWN`), the app is matched by
bundle name and fingerprint (`verify_with_bundle_name`). This step needs both
values to be set. It takes the first listed app with the same bundle name and
succeeds only if the fingerprints match.

## Verification tasks

`applinkverify.verify_task.VerifyTask` holds three things:

- a `TaskType`
- the app identity
- a copy of a `VerifyResultInfo`, which maps each host to a tuple of
  (status, last verification time in epoch seconds as text, retry count)

It takes these keyword arguments:

- `saver(bundle_name, result_info) -> bool` persists the results
- `task_sink(http_task)` receives each HTTP task that `execute()` creates
- `clock()` returns the current epoch seconds

When the task is created, it collects the hosts that need checking, using
`is_need_retry`:

- `STATE_SUCCESS` and `FORBIDDEN_FOREVER` hosts are skipped.
- A `FAILURE_CLIENT_ERROR` host with a recorded time is retried only once
  more than `calc_retry_duration(count)` seconds have passed. That is
  3600 × 2^count. If the recorded time cannot be read, the host is skipped.
  If no time is recorded, the host is retried.
- Every other status is retried.

`execute()` creates a `VerifyHttpTask` for each pending host, hands each one
to `task_sink` and returns them as a list. A `VerifyHttpTask` does the
following:

- builds a GET `HttpRequest` for the host's asset file
  (`create_client_task`)
- reports the response back on success, failure or cancellation
- cancels its `HttpClientTask` when the received data would go over 20 KiB

`on_post_verify` records the result for a host.
`update_verify_result_info` keeps the current time. For a repeated client
error it also raises the retry count, and when the count reaches seven it
turns the status into `FORBIDDEN_FOREVER`. Once no host is pending, the task
calls `save_domain_verify_status`. That method returns `False` when there is
no saver, and subclasses may override it.

## Service configuration

`applinkverify.service_config` provides:

- the request codes `AgentInterfaceCode` and `MgrInterfaceCode`
- `RdbConfig`, the location and table settings of the result database, whose
  `database_file()` joins the path and the name
- `RdbDataItem`, one stored row
- `ScopeGuard`, a context manager that runs a cleanup callback on exit
  unless `dismiss()` was called

## What this package does not do

- It sends no HTTP requests. `VerifyHttpTask` prepares requests and handles
  the responses you feed it.
- It stores nothing. `RdbConfig` and `RdbDataItem` only describe the
  database, and persisting results is left to the `saver` you supply.
- It has no service and no command line.