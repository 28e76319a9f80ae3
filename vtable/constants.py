import os

DATA_DIR = 'data'
LOGS_DIR = 'logs'

ASSETS_DIR = os.path.join(DATA_DIR, 'assets')

FONTS_DIR = os.path.join(ASSETS_DIR, 'fonts')

NOTO_SANS_CJK_BOLD_FONT_PATH = os.path.join(FONTS_DIR, 'NotoSansCJK-Bold.ttc')
NOTO_SANS_CJK_REGULAR_FONT_PATH = os.path.join(FONTS_DIR, 'NotoSansCJK-Regular.ttc')

LOG_FILE_PATH = os.path.join(LOGS_DIR, 'vtable.log')

ALL_DIRS = tuple(attrib_value for attrib_name, attrib_value in list(globals().items())
                 if attrib_name.endswith('DIR'))

FONT = os.environ.get('VTABLE_FONT', 'Noto Sans,Noto Sans CJK JP,Noto Sans CJK SC')
FONT_SIZE = int(os.environ.get('VTABLE_FONT_SIZE', '20'))
SEPARATOR_GAP = int(os.environ.get('VTABLE_SEPARATOR_GAP', '10'))
