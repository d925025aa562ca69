"""
Тесты для лексического анализатора.

Проверяет токенизацию текста, тегов всех видов, путей, строковых
параметров и конечность разбора некорректного ввода.
"""

import time

from stache.lexer import TemplateLexer, tokenize_template
from stache.tokens import TokenKind
from tests.conftest import kinds


class TestTemplateLexer:
    """Тесты для базовой функциональности лексера."""

    def test_empty_template(self):
        """Пустой шаблон должен возвращать только EOF токен."""
        tokens = tokenize_template("")

        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF
        assert tokens[0].text == ""

    def test_plain_text(self):
        """Текст без тегов — один CONTENT."""
        tokens = tokenize_template("Hello, world!")

        assert kinds(tokens) == ["CONTENT"]
        assert tokens[0].text == "Hello, world!"
        assert tokens[-1].kind == TokenKind.EOF

    def test_simple_mustache(self):
        tokens = tokenize_template("{{foo}}")

        assert kinds(tokens) == ["OPEN", "ID", "CLOSE"]
        assert tokens[1].text == "foo"

    def test_path_with_parent(self):
        tokens = tokenize_template("{{../foo/bar}}")

        assert kinds(tokens) == ["OPEN", "ID", "SEP", "ID", "SEP", "ID", "CLOSE"]
        assert tokens[1].text == ".."
        assert tokens[3].text == "foo"
        assert tokens[5].text == "bar"

    def test_path_with_this(self):
        tokens = tokenize_template("{{this/foo}}")

        assert kinds(tokens) == ["OPEN", "ID", "SEP", "ID", "CLOSE"]
        assert tokens[1].text == "this"
        assert tokens[3].text == "foo"

    def test_dotted_path(self):
        """Точка внутри пути работает как разделитель."""
        tokens = tokenize_template("{{person.name}}")

        assert kinds(tokens) == ["OPEN", "ID", "SEP", "ID", "CLOSE"]
        assert tokens[2].text == "."

    def test_mustache_with_spaces(self):
        tokens = tokenize_template("{{  foo  }}")

        assert kinds(tokens) == ["OPEN", "ID", "CLOSE"]
        assert tokens[1].text == "foo"

    def test_raw_content_around_tag(self):
        tokens = tokenize_template("foo {{ bar }} baz")

        assert kinds(tokens) == ["CONTENT", "OPEN", "ID", "CLOSE", "CONTENT"]
        assert tokens[0].text == "foo "
        assert tokens[4].text == " baz"

    def test_partials(self):
        assert kinds(tokenize_template("{{> foo}}")) == ["OPEN_PARTIAL", "ID", "CLOSE"]
        assert kinds(tokenize_template("{{>foo}}")) == ["OPEN_PARTIAL", "ID", "CLOSE"]
        assert kinds(tokenize_template("{{>foo  }}")) == ["OPEN_PARTIAL", "ID", "CLOSE"]
        assert kinds(tokenize_template("{{> foo bar }}")) == ["OPEN_PARTIAL", "ID", "ID", "CLOSE"]

    def test_comment(self):
        """Комментарий — один токен с текстом как есть."""
        tokens = tokenize_template("foo {{! this is a comment }} bar {{ baz }}")

        assert kinds(tokens) == ["CONTENT", "COMMENT", "CONTENT", "OPEN", "ID", "CLOSE"]
        assert tokens[1].text == " this is a comment "

    def test_block_open_and_close(self):
        tokens = tokenize_template("{{#foo}}content{{/foo}}")

        assert kinds(tokens) == [
            "OPEN_BLOCK", "ID", "CLOSE", "CONTENT", "OPEN_ENDBLOCK", "ID", "CLOSE"
        ]

    def test_inverse_sections(self):
        assert kinds(tokenize_template("{{^}}")) == ["OPEN_INVERSE", "CLOSE"]

        tokens = tokenize_template("{{^ foo  }}")
        assert kinds(tokens) == ["OPEN_INVERSE", "ID", "CLOSE"]
        assert tokens[1].text == "foo"

    def test_params(self):
        tokens = tokenize_template("{{ foo bar baz }}")

        assert kinds(tokens) == ["OPEN", "ID", "ID", "ID", "CLOSE"]
        assert [t.text for t in tokens[1:4]] == ["foo", "bar", "baz"]

    def test_string_params(self):
        tokens = tokenize_template('{{ foo bar "baz bat" }}')

        assert kinds(tokens) == ["OPEN", "ID", "ID", "STRING", "CLOSE"]
        assert tokens[3].text == "baz bat"

    def test_string_with_escaped_quote(self):
        tokens = tokenize_template('{{ foo "bar\\"baz" }}')

        assert kinds(tokens) == ["OPEN", "ID", "STRING", "CLOSE"]
        assert tokens[2].text == 'bar"baz'

    def test_token_positions(self):
        """Позиции токенов учитывают переводы строк."""
        tokens = tokenize_template("line\n  {{foo}}")

        open_token = tokens[1]
        assert open_token.position == 7
        assert open_token.line == 2
        assert open_token.column == 3


class TestLexerTermination:
    """Некорректный ввод останавливает лексер без EOF."""

    def test_single_closing_brace_at_eof(self):
        lexer = TemplateLexer("{{foo}")
        tokens = lexer.tokenize()

        assert kinds(tokens) == ["OPEN", "ID"]
        assert tokens[-1].kind != TokenKind.EOF
        assert lexer.halted

    def test_invalid_identifier_character(self):
        tokens = tokenize_template("{{foo & }}")

        assert kinds(tokens) == ["OPEN", "ID"]

    def test_unterminated_tag(self):
        tokens = tokenize_template("text {{foo bar")

        assert kinds(tokens) == ["CONTENT", "OPEN", "ID", "ID"]

    def test_unterminated_comment(self):
        tokens = tokenize_template("a {{! never closed")

        assert kinds(tokens) == ["CONTENT"]

    def test_unterminated_string(self):
        tokens = tokenize_template('{{foo "bar}}')

        assert kinds(tokens) == ["OPEN", "ID"]

    def test_long_malformed_input_is_bounded(self):
        """Разбор длинного некорректного ввода завершается быстро."""
        text = "{{" + "a " * 50000 + "}"

        started = time.monotonic()
        tokens = tokenize_template(text)
        elapsed = time.monotonic() - started

        assert tokens[-1].kind != TokenKind.EOF
        assert len(tokens) == 50001
        assert elapsed < 5
