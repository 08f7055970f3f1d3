import http

import pytest

from problem_details import (InvalidURIError, Problem, ProblemBuilder,
                             ProblemStatus, builder, extension)
from problem_details.problem import Extension


def test_builder_factories():
    assert isinstance(builder(), ProblemBuilder)
    assert isinstance(Problem.builder(), ProblemBuilder)


def test_build_empty():
    problem = builder().build()

    assert problem.type == 'about:blank'
    assert problem.title is None
    assert problem.status == 0
    assert problem.detail is None
    assert problem.instance is None
    assert list(problem.extensions) == []


def test_build_all_fields():
    problem = builder() \
        .type('https://example.com/problems/out-of-stock') \
        .title('Out of stock') \
        .status(409) \
        .detail('Item 42 is no longer available') \
        .instance('/orders/1234') \
        .extension('item', 42) \
        .build()

    assert problem == Problem(
        type='https://example.com/problems/out-of-stock',
        title='Out of stock',
        status=409,
        detail='Item 42 is no longer available',
        instance='/orders/1234',
        extensions={'item': 42},
    )


def test_build_is_repeatable():
    b = builder().status(404)

    first = b.build()
    second = b.detail('changed').build()

    assert first is not second
    assert first.detail is None
    assert second.detail == 'changed'


class TestType:

    def test_none_clears(self):
        problem = builder().type('https://example.com/problem').type(None).build()

        assert problem.type == 'about:blank'

    def test_never_defaulted_early(self):
        b = builder()

        assert b._type is None
        assert b.build().type == 'about:blank'

    @pytest.mark.parametrize(
        'value', [
            'about:blank',
            'https://example.com/problems/out-of-stock',
            'urn:uuid:6e8bc430-9c3a-11d9-9669-0800200c9a66',
            '/problems/out-of-stock',
            'out-of-stock',
            'https://example.com/a%20b?q=1#frag',
            'http://[::1]:8080/x',
            'https://example.com/café',
        ],
    )
    def test_valid(self, value):
        assert builder().type(value).build().type == value

    @pytest.mark.parametrize(
        'value', [
            'https://example.com/a b',
            'https://example.com/{id}',
            'https://example.com/%zz',
            'https://example.com/100%',
            '1http://example.com',
            ':no-scheme',
            'http://[::1/x',
            'http://example.com:port/x',
            'tab\tinside',
        ],
    )
    def test_invalid(self, value):
        with pytest.raises(InvalidURIError):
            builder().type(value)

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            builder().type('not a uri')


class TestInstance:

    def test_none_clears(self):
        problem = builder().instance('/orders/1').instance(None).build()

        assert problem.instance is None

    def test_valid(self):
        assert builder().instance('/orders/1').build().instance == '/orders/1'

    def test_invalid(self):
        with pytest.raises(InvalidURIError):
            builder().instance('/orders/<1>')


class TestTitleAndDetail:

    def test_title(self):
        assert builder().title('Custom').status(404).build().title == 'Custom'

    def test_title_none_falls_back_to_status(self):
        assert builder().title('Custom').title(None).status(404).build().title == 'Not Found'

    def test_empty_title_is_kept(self):
        assert builder().title('').status(404).build().title == ''

    def test_detail_none_clears(self):
        assert builder().detail('detail').detail(None).build().detail is None


class TestStatus:

    def test_derives_title(self):
        problem = builder().status(404).build()

        assert problem.status == 404
        assert problem.title == 'Not Found'

    def test_unknown_status_has_no_title(self):
        problem = builder().status(999).build()

        assert problem.status == 999
        assert problem.title is None

    def test_deprecated_code_resolves_current_title(self):
        assert builder().status(413).build().title == 'Content Too Large'

    @pytest.mark.parametrize('value', [0, -1])
    def test_stored_verbatim(self, value):
        problem = builder().status(value).build()

        assert problem.status == value
        assert problem.title is None

    def test_http_status(self):
        problem = builder().status(http.HTTPStatus.NOT_FOUND).build()

        assert problem.status == 404
        assert type(problem.status) is int
        assert problem.title == 'Not Found'

    def test_problem_status(self):
        problem = builder().status(ProblemStatus.MULTI_STATUS).build()

        assert problem.title == ProblemStatus.MULTI_STATUS.title
        assert problem.status == ProblemStatus.MULTI_STATUS.status

    def test_problem_status_deprecated_member(self):
        problem = builder().status(ProblemStatus.PAYLOAD_TOO_LARGE).build()

        assert problem.status == 413
        assert problem.title == 'Payload Too Large'

    def test_problem_status_preserves_explicit_title(self):
        problem = builder().title('Custom').status(ProblemStatus.NOT_FOUND).build()

        assert problem.status == 404
        assert problem.title == 'Custom'

    def test_explicit_title_after_problem_status(self):
        problem = builder().status(ProblemStatus.NOT_FOUND).title('Custom').build()

        assert problem.title == 'Custom'

    def test_first_problem_status_title_is_kept(self):
        problem = builder() \
            .status(ProblemStatus.NOT_FOUND) \
            .status(ProblemStatus.BAD_REQUEST) \
            .build()

        assert problem.status == 400
        assert problem.title == 'Not Found'

    def test_none_is_noop(self):
        problem = builder().status(ProblemStatus.BAD_REQUEST).status(None).build()

        assert problem.status == 400
        assert problem.title == 'Bad Request'

    def test_none_on_empty_builder(self):
        problem = builder().status(None).build()

        assert problem.status == 0
        assert problem.title is None


class TestExtension:

    def test_insertion_order(self):
        problem = builder().extension('b', 1).extension('a', 2).extension('c', 3).build()

        assert list(problem.extensions) == ['b', 'a', 'c']

    def test_last_write_wins(self):
        problem = builder().extension('a', 1).extension('b', 2).extension('a', 3).build()

        assert list(problem.extensions) == ['a', 'b']
        assert problem.get_extension_value('a') == 3

    def test_none_name_ignored(self):
        problem = builder().extension(None, 'value').build()

        assert list(problem.extensions) == []

    def test_none_name_keeps_existing(self):
        problem = builder().extension('a', 1).extension(None, 'value').build()

        assert dict(problem.extension_members) == {'a': 1}

    def test_none_value_stored(self):
        problem = builder().extension('a', None).build()

        assert problem.has_extension('a')
        assert problem.get_extension_value('a') is None
        assert str(problem) == '{ "type" : "about:blank", "status" : 0 }'


class TestExtensions:

    def test_none_mapping(self):
        problem = builder().extension('a', 1).extensions(None).build()

        assert dict(problem.extension_members) == {'a': 1}

    def test_mapping(self):
        problem = builder().extensions({'a': 'b', 'c': None}).build()

        assert dict(problem.extension_members) == {'a': 'b', 'c': None}

    def test_mapping_with_none_key(self):
        problem = builder().extensions({None: 'ignored', 'a': 'b'}).build()

        assert list(problem.extensions) == ['a']
        assert problem.get_extension_value('a') == 'b'

    def test_empty_sequence(self):
        problem = builder().extensions([]).build()

        assert list(problem.extensions) == []

    def test_sequence_with_none_element(self):
        problem = builder() \
            .extensions([extension('a', 1), None, extension('b', 2)]) \
            .build()

        assert list(problem.extensions) == ['a', 'b']

    def test_tuple_with_none_element(self):
        problem = builder() \
            .extensions((extension('x', '1'), None, extension('y', '2'))) \
            .build()

        assert dict(problem.extension_members) == {'x': '1', 'y': '2'}

    def test_set(self):
        problem = builder().extensions({extension('x', 1), extension('y', 2)}).build()

        assert sorted(problem.extensions) == ['x', 'y']

    def test_generator(self):
        problem = builder().extensions(extension(k, i) for i, k in enumerate('abc')).build()

        assert dict(problem.extension_members) == {'a': 0, 'b': 1, 'c': 2}

    def test_element_with_none_key(self):
        problem = builder().extensions([Extension(None, 'v'), extension('a', 1)]).build()  # type: ignore

        assert list(problem.extensions) == ['a']

    def test_overwrites(self):
        problem = builder() \
            .extension('a', 1) \
            .extensions([extension('a', 2)]) \
            .extensions({'a': 3}) \
            .build()

        assert problem.get_extension_value('a') == 3


class TestPrePopulated:

    def test_from_problem(self):
        problem = Problem(
            type='https://example.com/p',
            title='T',
            status=418,
            detail='D',
            instance='/i',
            extensions={'a': 1},
        )

        assert ProblemBuilder(problem).build() == problem

    def test_from_problem_not_revalidated(self):
        problem = Problem(type='not a uri')

        assert ProblemBuilder(problem).build().type == 'not a uri'

    def test_builder_is_independent(self):
        problem = Problem(extensions={'a': 1})
        b = ProblemBuilder(problem)
        b.extension('b', 2)

        assert list(problem.extensions) == ['a']
