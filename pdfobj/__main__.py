"""
pdfobj CLI

사용법:
    pdfobj document.pdf --offset 1234
    pdfobj document.pdf --offset 1234 --count 3
    pdfobj objects.txt --count 0 -o out.txt
"""

import sys
import argparse
import logging

from .config import ParserConfig
from .core.byte_stream import slurp_bytes
from .core.parser import PDFParser
from .exceptions import PDFError
from .utils.logging import setup_logging


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"0 이상이어야 함: {value}")
    return number


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='pdfobj',
        description='pdfobj - PDF Object Syntax Parser',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
파일의 지정한 오프셋부터 PDF 객체를 파싱해서 다시 직렬화한다.

예시:
  pdfobj document.pdf --offset 1234
  pdfobj document.pdf --offset 1234 --count 3
  pdfobj objects.txt --count 0 --raw
  pdfobj objects.txt --count 0 -v --log-file parse.log
'''
    )

    parser.add_argument('file', help='입력 파일 경로')
    parser.add_argument('--offset', type=_non_negative_int, default=0, help='파싱 시작 바이트 오프셋')
    parser.add_argument('--count', '-n', type=_non_negative_int, default=1,
                        help='파싱할 객체 수 (0이면 파일 끝까지)')
    parser.add_argument('--raw', action='store_true', help='스트림 압축 해제 안 함')
    parser.add_argument('--max-depth', type=int, default=None, help='최대 중첩 깊이')
    parser.add_argument('--output', '-o', help='출력 파일')
    parser.add_argument('--verbose', '-v', action='store_true', help='디버그 로그 출력')
    parser.add_argument('--log-file', help='로그를 함께 기록할 파일')

    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, log_file=args.log_file)

    try:
        config = ParserConfig.from_env()
        if args.max_depth is not None:
            config.max_depth = args.max_depth
        if args.raw:
            config.decode_streams = False
        config.validate()

        data = slurp_bytes(args.file)
        if not 0 <= args.offset <= len(data):
            print(f"오류: 오프셋 범위 초과 (0-{len(data)})", file=sys.stderr)
            return 1

        pdf_parser = PDFParser(data, config)
        pdf_parser.lexer.seek(args.offset)

        chunks = []
        for i, obj in enumerate(pdf_parser.iter_objects()):
            chunks.append(obj.to_bytes())
            if args.count and i + 1 >= args.count:
                break
        output = b'\n'.join(chunks) + b'\n'

        if args.output:
            with open(args.output, 'wb') as f:
                f.write(output)
            print(f"저장됨: {args.output}", file=sys.stderr)
        else:
            sys.stdout.buffer.write(output)
            sys.stdout.flush()

    except PDFError as e:
        print(f"오류: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
