from problem_details import ProblemContext


def test_empty():
    context = ProblemContext()

    assert len(context) == 0
    assert context.to_dict() == {}
    assert context.contains_key('userId') is False
    assert context.get('userId') is None


def test_put_chaining():
    context = ProblemContext().put('userId', '12345').put('traceId', 'abcde')

    assert context.contains_key('userId')
    assert context.get('userId') == '12345'
    assert context['traceId'] == 'abcde'
    assert context.to_dict() == {'userId': '12345', 'traceId': 'abcde'}


def test_put_none_removes():
    context = ProblemContext().put('userId', '12345').put('userId', None)

    assert context.contains_key('userId') is False
    assert 'userId' not in context


def test_put_none_missing_key():
    context = ProblemContext().put('userId', None)

    assert len(context) == 0


def test_setitem_none_removes():
    context = ProblemContext({'userId': '12345'})
    context['userId'] = None

    assert context.to_dict() == {}


def test_init_skips_none():
    context = ProblemContext({'userId': '12345', 'traceId': None})

    assert context.to_dict() == {'userId': '12345'}


def test_to_dict_is_snapshot():
    context = ProblemContext().put('userId', '12345')
    snapshot = context.to_dict()
    context.put('traceId', 'abcde')
    snapshot['other'] = 'x'

    assert snapshot == {'userId': '12345', 'other': 'x'}
    assert context.to_dict() == {'userId': '12345', 'traceId': 'abcde'}


def test_mutable_mapping():
    context = ProblemContext({'a': '1', 'b': '2'})
    del context['a']
    context.update({'c': '3'})

    assert list(context) == ['b', 'c']
    assert repr(context) == "ProblemContext({'b': '2', 'c': '3'})"


def test_format():
    context = ProblemContext().put('userId', '12345')

    assert context.format('user {userId} is not allowed') == 'user 12345 is not allowed'
    assert context.format('missing {other} stays') == 'missing {other} stays'
    assert context.format('no placeholders') == 'no placeholders'
    assert context.format(None) is None
