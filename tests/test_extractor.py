import pytest

from crs_dictionary.errors import ExtractionError
from crs_dictionary.php_functions.extractor import FunctionNameExtractor


def test_extracts_zend_function_names():
    code = """
ZEND_FUNCTION(strlen)
{
    RETURN_LONG(0);
}

ZEND_FUNCTION( zend_version )
{
}
"""
    assert FunctionNameExtractor().extract(code) == ['strlen', 'zend_version']


def test_ignores_comments_strings_and_macro_definition():
    code = """
#define ZEND_FUNCTION(name) ZEND_NAMED_FUNCTION(zif_##name)
/* ZEND_FUNCTION(commented_out) */
// ZEND_FUNCTION(line_comment)
const char *doc = "ZEND_FUNCTION(in_string)";
ZEND_FUNCTION(real_one);
"""
    assert FunctionNameExtractor().extract(code) == ['real_one']


def test_drops_template_placeholders():
    code = 'ZEND_FUNCTION({$this->getDeclarationName()});\nZEND_FUNCTION(array_walk);\n'
    assert FunctionNameExtractor().extract(code) == ['array_walk']


def test_extract_tree_walks_sources_and_dedupes(tmp_path):
    (tmp_path / 'ext' / 'standard').mkdir(parents=True)
    (tmp_path / 'ext' / 'standard' / 'string.c').write_text('ZEND_FUNCTION(strlen)\n{\n}\n')
    (tmp_path / 'ext' / 'standard' / 'basic_functions_arginfo.h').write_text(
        'ZEND_FUNCTION(strlen);\nZEND_FUNCTION(exec);\n'
    )
    (tmp_path / 'README.md').write_text('ZEND_FUNCTION(not_source)\n')
    (tmp_path / '.git').mkdir()
    (tmp_path / '.git' / 'junk.c').write_text('ZEND_FUNCTION(in_git)\n')

    assert FunctionNameExtractor().extract_tree(tmp_path) == ['exec', 'strlen']


def test_extract_tree_without_declarations_fails(tmp_path):
    (tmp_path / 'main.c').write_text('int main(void) { return 0; }\n')
    with pytest.raises(ExtractionError):
        FunctionNameExtractor().extract_tree(tmp_path)


def test_extract_tree_requires_directory(tmp_path):
    with pytest.raises(ExtractionError):
        FunctionNameExtractor().extract_tree(tmp_path / 'missing')
