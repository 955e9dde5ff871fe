import logging
import os

from PyWebVTT import compile, parse
from PyWebVTT.Helpers.Localization import _
from PyWebVTT.Helpers.Tests import create_logfile, end_logfile, separator

def run_tests(subtitles_directory : str, results_directory : str) -> None:
    """
    Parse every .vtt file in the subtitles directory, compile it and parse the result again,
    checking that the cues and metadata survive the round trip.
    """
    log_file = create_logfile(results_directory, "roundtrip_tests.log")
    try:
        filenames = sorted(name for name in os.listdir(subtitles_directory) if name.endswith('.vtt'))
        for filename in filenames:
            logging.info(separator)
            logging.info(f"Round trip: {filename}")
            with open(os.path.join(subtitles_directory, filename), 'r', encoding='utf-8') as f:
                content = f.read()

            document = parse(content)
            compiled = compile(document)
            reparsed = parse(compiled)

            if reparsed.cues != document.cues:
                raise AssertionError(_("Cues changed after round trip in {}").format(filename))

            if reparsed.meta != document.meta:
                raise AssertionError(_("Metadata changed after round trip in {}").format(filename))

            if compile(reparsed) != compiled:
                raise AssertionError(_("Compiled output is not stable for {}").format(filename))

            logging.info(f"{len(document.cues)} cues survived the round trip")
    finally:
        end_logfile(log_file)
