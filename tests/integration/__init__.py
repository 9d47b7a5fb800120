"""Integration tests for adf-convert.

These tests run whole documents through the parser, the traversal engine
and the stock formatters, and drive the CLI against real files in
temporary directories. They bridge the gap between isolated unit tests
and manual use of the command.

Test Coverage:
- Document conversion: realistic ADF pages through every formatter
- CLI round trip: config file, input file, output file and exit codes
"""
