from ocpi_docs.models import (
    ConverterContext,
    ConverterState,
    TableOutcome,
    TableResult,
)


def test_converter_state_members():
    assert list(ConverterState) == [
        ConverterState.NORMAL,
        ConverterState.IN_CODE_FENCE,
        ConverterState.IN_TABLE_BLOCK,
    ]


def test_converter_context_defaults():
    ctx = ConverterContext()

    assert ctx.state is ConverterState.NORMAL
    assert ctx.heading_base == 0
    assert ctx.table_rows == []
    assert ctx.table_raw == []
    assert ctx.separator_pending is False


def test_converter_contexts_do_not_share_buffers():
    first = ConverterContext()
    second = ConverterContext()

    first.table_rows.append("| A |")

    assert second.table_rows == []


def test_table_result_fields():
    result = TableResult(outcome=TableOutcome.FALLBACK, lines=["....", "...."], expected_columns=0)

    assert result.outcome is TableOutcome.FALLBACK
    assert result.lines == ["....", "...."]
    assert result.expected_columns == 0
