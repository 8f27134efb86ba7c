"""
sentry_core.integrations
~~~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2018 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import logging
from weakref import ref as weakref

__all__ = (
    'Integration', 'get_default_integrations', 'get_integrations',
    'setup_integrations',
)

logger = logging.getLogger('sentry_core')


class Integration(object):
    """
    All integrations need to subclass this class

    ``install`` receives the client options and performs whatever
    environment setup the integration needs. It must be safe to call more
    than once; only the first call does any work.
    """

    name = None
    _client = None

    @property
    def client(self):
        if self._client is None:
            return None
        return self._client()

    def bind_client(self, client):
        self._client = weakref(client)

    def install(self, options=None):
        raise NotImplementedError

    def __repr__(self):
        return '<%s: %s>' % (type(self).__name__, self.name)


def get_default_integrations():
    from sentry_core.integrations.inboundfilters import InboundFilters
    from sentry_core.integrations.logging import LoggingIntegration

    return [InboundFilters(), LoggingIntegration()]


def get_integrations(options, default_integrations=None):
    """
    Resolves the final list of integrations from the client options.

    The ``default_integrations`` option may be ``False`` (no defaults), a
    list which replaces the defaults, or anything truthy for the builtin
    defaults (or the ``default_integrations`` argument, when given).
    ``integrations`` is either a list appended to the defaults or a
    callable which receives the defaults and returns the final list.
    """
    defaults = options.get('default_integrations', True)
    if defaults is True or defaults is None:
        if default_integrations is None:
            default_integrations = get_default_integrations()
        defaults = list(default_integrations)
    elif not defaults:
        defaults = []
    else:
        defaults = list(defaults)

    user_integrations = options.get('integrations')
    if callable(user_integrations):
        return list(user_integrations(defaults))
    return defaults + list(user_integrations or ())


def setup_integrations(integrations, options, client=None):
    """
    Binds ``integrations`` to ``client``, installs them in order and
    returns a mapping of name to integration. Later integrations with the
    same name are skipped.
    """
    installed = {}
    for integration in integrations:
        if integration.name in installed:
            logger.debug('Integration %s already installed, skipping', integration.name)
            continue
        if client is not None:
            integration.bind_client(client)
        integration.install(options)
        installed[integration.name] = integration
        logger.debug('Integration installed: %s', integration.name)
    return installed
