"""
Create the PHP function name word lists for the OWASP CRS rules.

The function names are extracted out of the PHP source code and filtered
into different categories:

Filter 1: Is the function name an English word?
If yes: Add to source for rule 933161
If no: Continue
Filter 2: Is the function name frequently used on GitHub (across all PHP repos)?
If yes: Add to word list for 933150
If no: Add to word list for 933151

Rules 933150 and 933151 are parallel match rules, so the output for them is
the parallel match file. Rule 933161 is a regular expression rule, so its
output is the regex-assembly source for the CRS toolchain.

See https://github.com/coreruleset/coreruleset/pull/3228#issuecomment-1594813466
"""

import argparse
import logging
import sys
import time

from .common import setup_logging
from .config import (
    DEFAULT_AGE_LIMIT,
    DEFAULT_DATA_DIR,
    DEFAULT_FREQUENCY_LIMIT,
    DEFAULT_HIGH_RISK_PATH,
    DEFAULT_RA_DIR,
    DEFAULT_SPELL_PATH,
    ALL_RULES,
    ERRORS_FILENAME,
    FREQUENCIES_FILENAME,
    RULE_FREQUENT,
    RULE_WORDS,
    RunConfig,
)
from .errors import DictionaryError
from .php_functions.cache import FrequencyStore
from .php_functions.classifiers import SpellScriptClassifier
from .php_functions.extractor import FunctionNameExtractor
from .php_functions.filtering.seeds import read_seed_list
from .php_functions.oracle import GitHubCodeSearch
from .php_functions.pipeline import ClassificationPipeline
from .php_functions.writer import ArtifactWriter
from .repository import RunWorkspace, prepare_php_repo

logger = logging.getLogger("crs_dictionary")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="php-dictionary-creator",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-a", "--agelimit", default=DEFAULT_AGE_LIMIT,
                        help="Age in days before frequency is retrieved anew from GitHub (default: %(default)s)")
    parser.add_argument("-f", "--frequencylist", default=None,
                        help="File with frequencies of PHP function usage on GitHub")
    parser.add_argument("-F", "--frequencylimit", default=DEFAULT_FREQUENCY_LIMIT,
                        help="Minimum number of occurrences on GitHub to qualify for the base rule; "
                             "functions below it go to the stricter sibling (default: %(default)s)")
    parser.add_argument("-p", "--phprepo", default=None, help="Path to an existing PHP repository")
    parser.add_argument("-r", "--rules", default=" ".join(ALL_RULES),
                        help='Space separated list of rules to cover (default: "%(default)s")')
    parser.add_argument("-s", "--spell", default=str(DEFAULT_SPELL_PATH),
                        help="Path of spell.sh script (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--data-dir", default=str(DEFAULT_DATA_DIR),
                        help="Directory of the .data rule files (default: %(default)s)")
    parser.add_argument("--ra-dir", default=str(DEFAULT_RA_DIR),
                        help="Directory of the regex-assembly files (default: %(default)s)")
    parser.add_argument("--high-risk", default=str(DEFAULT_HIGH_RISK_PATH),
                        help="List of high-risk PHP functions always added to 933150 (default: %(default)s)")
    parser.add_argument("--error-report", default=None,
                        help="Write the functions whose frequency lookup failed to this file")
    return parser


def run(config, classifier, oracle, workspace, identifiers=None):
    """Execute one run inside `workspace`. Returns the ClassificationResult."""
    store_path = config.frequency_store or workspace.file(FREQUENCIES_FILENAME)
    store = FrequencyStore.load(store_path)

    word_seeds = read_seed_list(config.stricter_sibling_path) if config.wants(RULE_WORDS) else []
    high_risk = read_seed_list(config.high_risk_path) if config.wants(RULE_FREQUENT) else []

    if identifiers is None:
        repo = prepare_php_repo(config.php_repo, workspace)
        logger.info("Extracting PHP function names ...")
        identifiers = FunctionNameExtractor().extract_tree(repo)
    identifiers = sorted(set(identifiers))
    logger.info("%d function names found", len(identifiers))

    pipeline = ClassificationPipeline(config, classifier, oracle, store, word_seeds, high_risk)
    result = pipeline.run(identifiers)

    ArtifactWriter(config).write(result)
    ArtifactWriter.write_error_report(result.errors, config.error_report or workspace.file(ERRORS_FILENAME))
    return result


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    started = time.time()

    try:
        config = RunConfig.from_args(args).validate()
        with RunWorkspace() as workspace:
            classifier = SpellScriptClassifier(config.spell_path, work_dir=workspace.path)
            classifier.check_available()
            oracle = GitHubCodeSearch(config.github_token)
            run(config, classifier, oracle, workspace)
    except DictionaryError as exc:
        logger.error("%s This is fatal. Aborting.", exc)
        return 1

    if config.wants(RULE_WORDS):
        logger.info("933161.ra file updated, mind to call the crs-toolchain regex update before committing changes")
    logger.info("The script took %d seconds to complete.", time.time() - started)
    return 0


if __name__ == "__main__":
    sys.exit(main())
