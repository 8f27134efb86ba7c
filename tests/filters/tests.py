import re

import pytest

from sentry_core.integrations.inboundfilters import (
    FilterConfig, InboundFilters, Literal, Pattern, get_event_filter_url,
    get_possible_event_messages, is_blacklisted_url, is_ignored_error,
    is_whitelisted_url, make_matcher, should_drop_event)
from sentry_core.utils.testutils import TestCase

MESSAGE_EVENT = {
    'message': 'captureMessage',
}

EXCEPTION_EVENT = {
    'exception': {
        'values': [{
            'type': 'SyntaxError',
            'value': 'unidentified ? at line 1337',
        }],
    },
}

URL_MESSAGE_EVENT = {
    'message': 'wat',
    'stacktrace': {
        'frames': [{'filename': 'https://awesome-analytics.io/some/file.js'}],
    },
}

URL_EXCEPTION_EVENT = {
    'exception': {
        'values': [{
            'stacktrace': {
                'frames': [{'filename': 'https://awesome-analytics.io/some/file.js'}],
            },
        }],
    },
}


class ShouldDropEventTest(TestCase):
    def setUp(self):
        self.filters = InboundFilters()

    def test_drops_when_error_is_ignored(self):
        self.filters.is_ignored_error = lambda event: True
        assert self.filters.should_drop_event({}) is True

    def test_drops_when_url_is_blacklisted(self):
        self.filters.is_blacklisted_url = lambda event: True
        assert self.filters.should_drop_event({}) is True

    def test_drops_when_url_is_not_whitelisted(self):
        self.filters.is_whitelisted_url = lambda event: False
        assert self.filters.should_drop_event({}) is True

    def test_drops_when_not_blacklisted_and_not_whitelisted(self):
        self.filters.is_blacklisted_url = lambda event: False
        self.filters.is_whitelisted_url = lambda event: False
        assert self.filters.should_drop_event({}) is True

    def test_blacklist_wins_over_whitelist(self):
        self.filters.is_blacklisted_url = lambda event: True
        self.filters.is_whitelisted_url = lambda event: True
        assert self.filters.should_drop_event({}) is True

    def test_keeps_when_whitelisted_and_not_blacklisted(self):
        self.filters.is_blacklisted_url = lambda event: False
        self.filters.is_whitelisted_url = lambda event: True
        assert self.filters.should_drop_event({}) is False

    def test_keeps_when_no_check_matches(self):
        self.filters.is_ignored_error = lambda event: False
        self.filters.is_blacklisted_url = lambda event: False
        self.filters.is_whitelisted_url = lambda event: True
        assert self.filters.should_drop_event({}) is False

    def test_uninstalled_filters_keep_everything(self):
        assert self.filters.should_drop_event(MESSAGE_EVENT) is False
        assert self.filters.should_drop_event(URL_EXCEPTION_EVENT) is False


class IgnoreErrorsTest(TestCase):
    def setUp(self):
        self.filters = InboundFilters()

    def test_string_filter_with_partial_match(self):
        self.filters.install({'ignore_errors': ['capture']})
        assert self.filters.is_ignored_error(MESSAGE_EVENT) is True

    def test_string_filter_with_exact_match(self):
        self.filters.install({'ignore_errors': ['captureMessage']})
        assert self.filters.is_ignored_error(MESSAGE_EVENT) is True

    def test_regexp_filter_with_partial_match(self):
        self.filters.install({'ignore_errors': [re.compile(r'capture')]})
        assert self.filters.is_ignored_error(MESSAGE_EVENT) is True

    def test_regexp_filter_with_exact_match(self):
        self.filters.install({'ignore_errors': [re.compile(r'^captureMessage$')]})
        assert self.filters.is_ignored_error(MESSAGE_EVENT) is True
        assert self.filters.is_ignored_error({
            'message': 'captureMessageSomething',
        }) is False

    def test_uses_message_when_message_and_exception_are_available(self):
        self.filters.install({'ignore_errors': [re.compile(r'captureMessage')]})
        event = dict(EXCEPTION_EVENT, **MESSAGE_EVENT)
        assert self.filters.is_ignored_error(event) is True

    def test_message_takes_precedence_over_exception(self):
        self.filters.install({'ignore_errors': ['SyntaxError']})
        event = dict(EXCEPTION_EVENT, **MESSAGE_EVENT)
        assert self.filters.is_ignored_error(event) is False

    def test_can_use_multiple_filters(self):
        self.filters.install({
            'ignore_errors': ['captureMessage', re.compile(r'SyntaxError')],
        })
        assert self.filters.is_ignored_error(MESSAGE_EVENT) is True
        assert self.filters.is_ignored_error(EXCEPTION_EVENT) is True

    def test_uses_default_filters(self):
        self.filters.install()
        assert self.filters.is_ignored_error({
            'exception': {
                'values': [{
                    'type': '[undefined]',
                    'value': 'Script error.',
                }],
            },
        }) is True

    def test_injected_defaults_are_prepended(self):
        filters = InboundFilters(default_ignore_errors=['Broken pipe'])
        filters.install({'ignore_errors': ['captureMessage']})
        assert filters.config.ignore_errors == (
            Literal('Broken pipe'), Literal('captureMessage'))
        assert filters.is_ignored_error({'message': 'Broken pipe'}) is True

    def test_uses_exception_data_when_message_is_unavailable(self):
        self.filters.install({
            'ignore_errors': ['SyntaxError: unidentified ? at line 1337'],
        })
        assert self.filters.is_ignored_error(EXCEPTION_EVENT) is True

    def test_can_match_on_exception_value(self):
        self.filters.install({'ignore_errors': [re.compile(r'unidentified \?')]})
        assert self.filters.is_ignored_error(EXCEPTION_EVENT) is True

    def test_can_match_on_exception_type(self):
        self.filters.install({'ignore_errors': [re.compile(r'^SyntaxError')]})
        assert self.filters.is_ignored_error(EXCEPTION_EVENT) is True

    def test_only_first_exception_value_is_considered(self):
        self.filters.install({'ignore_errors': ['KeyError']})
        event = {
            'exception': {
                'values': [
                    {'type': 'ValueError', 'value': 'bad'},
                    {'type': 'KeyError', 'value': 'missing'},
                ],
            },
        }
        assert self.filters.is_ignored_error(event) is False

    def test_missing_exception_parts_keep_separator(self):
        self.filters.install({'ignore_errors': [re.compile(r'^: oops$')]})
        event = {'exception': {'values': [{'value': 'oops'}]}}
        assert self.filters.is_ignored_error(event) is True

    def test_no_candidates_is_not_ignored(self):
        self.filters.install({'ignore_errors': ['']})
        assert self.filters.is_ignored_error({}) is False
        assert self.filters.is_ignored_error({'exception': {'values': []}}) is False


class UrlFiltersTest(TestCase):
    def setUp(self):
        self.filters = InboundFilters()

    def test_message_string_filter(self):
        self.filters.install({
            'blacklist_urls': ['https://awesome-analytics.io'],
            'whitelist_urls': ['https://awesome-analytics.io'],
        })
        assert self.filters.is_blacklisted_url(URL_MESSAGE_EVENT) is True
        assert self.filters.is_whitelisted_url(URL_MESSAGE_EVENT) is True
        assert self.filters.should_drop_event(URL_MESSAGE_EVENT) is True

    def test_message_regexp_filter(self):
        self.filters.install({
            'blacklist_urls': [re.compile(r'awesome-analytics\.io')],
        })
        assert self.filters.is_blacklisted_url(URL_MESSAGE_EVENT) is True
        assert self.filters.is_whitelisted_url(URL_MESSAGE_EVENT) is True

    def test_messages_without_stacktrace_are_not_filtered(self):
        self.filters.install({
            'blacklist_urls': ['https://awesome-analytics.io'],
            'whitelist_urls': ['https://awesome-analytics.io'],
        })
        assert self.filters.is_blacklisted_url({'message': 'any'}) is False
        assert self.filters.is_whitelisted_url({'message': 'any'}) is True

    def test_exception_string_filter(self):
        self.filters.install({
            'blacklist_urls': ['https://awesome-analytics.io'],
            'whitelist_urls': ['https://awesome-analytics.io'],
        })
        assert self.filters.is_blacklisted_url(URL_EXCEPTION_EVENT) is True
        assert self.filters.is_whitelisted_url(URL_EXCEPTION_EVENT) is True

    def test_exception_regexp_filter(self):
        self.filters.install({
            'blacklist_urls': [re.compile(r'awesome-analytics\.io')],
            'whitelist_urls': [re.compile(r'awesome-analytics\.io')],
        })
        assert self.filters.is_blacklisted_url(URL_EXCEPTION_EVENT) is True
        assert self.filters.is_whitelisted_url(URL_EXCEPTION_EVENT) is True

    def test_events_not_matching_either_list(self):
        self.filters.install({
            'blacklist_urls': ['some-other-domain.com'],
            'whitelist_urls': ['some-other-domain.com'],
        })
        assert self.filters.is_blacklisted_url(URL_EXCEPTION_EVENT) is False
        assert self.filters.is_whitelisted_url(URL_EXCEPTION_EVENT) is False
        assert self.filters.should_drop_event(URL_EXCEPTION_EVENT) is True

    def test_multiple_filters(self):
        self.filters.install({
            'blacklist_urls': ['some-other-domain.com', re.compile(r'awesome-analytics\.io')],
            'whitelist_urls': ['some-other-domain.com', re.compile(r'awesome-analytics\.io')],
        })
        assert self.filters.is_blacklisted_url(URL_EXCEPTION_EVENT) is True
        assert self.filters.is_whitelisted_url(URL_EXCEPTION_EVENT) is True

    def test_whitelisted_event_is_kept(self):
        self.filters.install({
            'whitelist_urls': [re.compile(r'awesome-analytics\.io')],
        })
        assert self.filters.should_drop_event(URL_EXCEPTION_EVENT) is False

    def test_malformed_event_defaults(self):
        malformed_event = {
            'stacktrace': {
                'frames': None,
            },
        }
        self.filters.install({
            'blacklist_urls': ['https://awesome-analytics.io'],
            'whitelist_urls': ['https://awesome-analytics.io'],
        })
        assert self.filters.is_blacklisted_url(malformed_event) is False
        assert self.filters.is_whitelisted_url(malformed_event) is True

    def test_malformed_exception_values(self):
        self.filters.install({'ignore_errors': ['foo']})
        for event in (
            {'exception': {'values': ['not a dict']}},
            {'exception': [{'type': 'foo'}]},
            {'exception': {'values': {'type': 'foo'}}},
            {'exception': 'foo'},
        ):
            assert self.filters.is_ignored_error(event) is False
            assert self.filters.should_drop_event(event) is False

    def test_non_string_message_is_not_matched(self):
        self.filters.install({'ignore_errors': ['4', re.compile(r'\d')]})
        assert get_possible_event_messages({'message': 42}) == []
        assert self.filters.is_ignored_error({'message': 42}) is False
        assert self.filters.should_drop_event({'message': 42}) is False

    def test_non_string_filename_defaults(self):
        self.filters.install({
            'blacklist_urls': ['awesome'],
            'whitelist_urls': ['awesome'],
        })
        event = {'stacktrace': {'frames': [{'filename': 1234}]}}
        assert get_event_filter_url(event) is None
        assert self.filters.is_blacklisted_url(event) is False
        assert self.filters.is_whitelisted_url(event) is True

    def test_malformed_frames(self):
        self.filters.install({
            'blacklist_urls': ['awesome'],
        })
        event = {'stacktrace': {'frames': {'filename': 'awesome'}}}
        assert self.filters.is_blacklisted_url(event) is False

    def test_frame_without_filename_defaults(self):
        self.filters.install({
            'blacklist_urls': ['awesome'],
            'whitelist_urls': ['awesome'],
        })
        event = {'stacktrace': {'frames': [{'function': 'foo'}]}}
        assert self.filters.is_blacklisted_url(event) is False
        assert self.filters.is_whitelisted_url(event) is True


class InstallTest(TestCase):
    def test_first_install_wins(self):
        filters = InboundFilters()
        assert filters.install({'ignore_errors': ['foo']}) is True
        assert filters.install({'ignore_errors': ['bar']}) is False
        assert filters.is_ignored_error({'message': 'foo'}) is True
        assert filters.is_ignored_error({'message': 'bar'}) is False

    def test_config_is_immutable(self):
        filters = InboundFilters()
        filters.install({'blacklist_urls': ['foo']})
        with pytest.raises(AttributeError):
            filters.config.blacklist_urls = ()
        assert isinstance(filters.config.blacklist_urls, tuple)

    def test_invalid_pattern_type(self):
        with pytest.raises(TypeError):
            InboundFilters().install({'ignore_errors': [42]})


class HelpersTest(TestCase):
    def test_make_matcher(self):
        regex = re.compile('foo')
        assert make_matcher('foo') == Literal('foo')
        assert make_matcher(regex) == Pattern(regex)
        assert make_matcher(Literal('bar')) == Literal('bar')

    def test_possible_event_messages(self):
        assert get_possible_event_messages(MESSAGE_EVENT) == ['captureMessage']
        assert get_possible_event_messages(EXCEPTION_EVENT) == [
            'SyntaxError: unidentified ? at line 1337']
        assert get_possible_event_messages({'message': ''}) == []

    def test_filter_url_prefers_top_level_stacktrace(self):
        event = {
            'stacktrace': {'frames': [{'filename': 'a.py'}, {'filename': 'b.py'}]},
            'exception': {'values': [{
                'stacktrace': {'frames': [{'filename': 'c.py'}]},
            }]},
        }
        assert get_event_filter_url(event) == 'b.py'

    def test_filter_url_uses_last_exception_value(self):
        event = {
            'exception': {'values': [
                {'stacktrace': {'frames': [{'filename': 'first.py'}]}},
                {'stacktrace': {'frames': [{'filename': 'x.py'}, {'filename': 'last.py'}]}},
            ]},
        }
        assert get_event_filter_url(event) == 'last.py'

    def test_filter_url_missing(self):
        assert get_event_filter_url({}) is None
        assert get_event_filter_url({'stacktrace': {'frames': []}}) is None
        assert get_event_filter_url({'exception': {'values': [{}]}}) is None

    def test_pure_functions(self):
        config = FilterConfig.build(
            ignore_errors=['capture'],
            blacklist_urls=['evil.example'],
            whitelist_urls=[re.compile(r'^https://good\.example/')],
            default_ignore_errors=(),
        )
        assert is_ignored_error(MESSAGE_EVENT, config) is True
        event = {'stacktrace': {'frames': [{'filename': 'https://good.example/app.py'}]}}
        assert is_blacklisted_url(event, config) is False
        assert is_whitelisted_url(event, config) is True
        assert should_drop_event(event, config) is False
        event = {'stacktrace': {'frames': [{'filename': 'https://other.example/app.py'}]}}
        assert should_drop_event(event, config) is True
