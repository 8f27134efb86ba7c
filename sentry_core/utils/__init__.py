"""
sentry_core.utils
~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import inspect


def merge_dicts(*dicts):
    out = {}
    for d in dicts:
        if not d:
            continue

        for k, v in d.items():
            out[k] = v
    return out


def copy_containers(value, _memo=None):
    """
    Copies nested dicts, lists and tuples. Every other value is shared
    with the original, so objects which cannot be copied (locks, sockets,
    connections) are fine to pass.
    """
    if _memo is None:
        _memo = {}
    if id(value) in _memo:
        return _memo[id(value)]

    if isinstance(value, dict):
        out = _memo[id(value)] = {}
        for k, v in value.items():
            out[k] = copy_containers(v, _memo)
        return out
    if isinstance(value, list):
        out = _memo[id(value)] = []
        out.extend(copy_containers(v, _memo) for v in value)
        return out
    if isinstance(value, tuple):
        return tuple(copy_containers(v, _memo) for v in value)
    return value


def import_string(key):
    if '.' not in key:
        return __import__(key)

    module_name, class_name = key.rsplit('.', 1)
    module = __import__(module_name, {}, {}, [class_name], 0)
    return getattr(module, class_name)


def get_auth_header(protocol, timestamp, client, api_key,
                    api_secret=None, **kwargs):
    header = [
        ('sentry_timestamp', timestamp),
        ('sentry_client', client),
        ('sentry_version', protocol),
        ('sentry_key', api_key),
    ]
    if api_secret:
        header.append(('sentry_secret', api_secret))

    return 'Sentry %s' % ', '.join('%s=%s' % (k, v) for k, v in header)


async def maybe_await(value):
    """
    Collapses "a value or an awaitable of that value" into one await.
    """
    if inspect.isawaitable(value):
        return await value
    return value
