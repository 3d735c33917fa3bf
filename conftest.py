"""Shared fixtures for the DBC test modules."""

import pytest

from dbcforge.src.dbc_config import DbcSettings
from dbcforge.src.dbc_parser import DbcParser

NS_SYMBOLS = [
    "NS_DESC_", "CM_", "BA_DEF_", "BA_", "VAL_", "CAT_DEF_", "CAT_", "FILTER",
    "BA_DEF_DEF_", "EV_DATA_", "ENVVAR_DATA_", "SGTYPE_", "SGTYPE_VAL_",
    "BA_DEF_SGTYPE_", "BA_SGTYPE_", "SIG_TYPE_REF_", "VAL_TABLE_", "SIG_GROUP_",
    "SIG_VALTYPE_", "SIGTYPE_VALTYPE_", "BO_TX_BU_", "BA_DEF_REL_", "BA_REL_",
    "BA_DEF_DEF_REL_", "BU_SG_REL_", "BU_EV_REL_", "BU_BO_REL_", "SG_MUL_VAL_",
]

_HEADER = 'VERSION "0.1"\nNS_ :\n' + "".join(f"\t{name}\n" for name in NS_SYMBOLS) + "BS_:\nBU_: PC\n"

_MESSAGES = '''
BO_ 2000 WebData_2000: 4 Vector__XXX
 SG_ Signal_8 : 24|8@1+ (1,0) [0|255] "" Vector__XXX
 SG_ Signal_7 : 16|8@1+ (1,0) [0|255] "" Vector__XXX
 SG_ Signal_6 : 8|8@1+ (1,0) [0|255] "" Vector__XXX
 SG_ Signal_5 : 0|8@1+ (1,0) [0|255] "" Vector__XXX

BO_ 1840 WebData_1840: 4 PC
 SG_ Signal_4 : 24|8@1+ (1,0) [0|255] "" Vector__XXX
 SG_ Signal_3 : 16|8@1+ (1,0) [0|255] "" Vector__XXX
 SG_ Signal_2 : 8|8@1+ (1,0) [0|255] "" Vector__XXX
 SG_ Signal_1 : 0|8@1+ (1,0) [0|0] "" Vector__XXX

BO_ 3040 WebData_3040: 8 Vector__XXX
 SG_ Signal_6 m2 : 0|4@1+ (1,0) [0|15] "" Vector__XXX
 SG_ Signal_5 m3 : 16|8@1+ (1,0) [0|255] "kmh" Vector__XXX
 SG_ Signal_4 m3 : 8|8@1+ (1,0) [0|255] "" Vector__XXX
 SG_ Signal_3 m3 : 0|4@1+ (1,0) [0|3] "" Vector__XXX
 SG_ Signal_2 m1 : 3|12@0+ (1,0) [0|4095] "Byte" Vector__XXX
 SG_ Signal_1 m0 : 0|4@1+ (1,0) [0|7] "Byte" Vector__XXX
 SG_ Switch M : 4|4@1+ (1,0) [0|3] "" Vector__XXX

EV_ Environment1: 0 [0|220] "" 0 6 DUMMY_NODE_VECTOR0 DUMMY_NODE_VECTOR2;
EV_ Environment2: 0 [0|177] "" 0 7 DUMMY_NODE_VECTOR1 DUMMY_NODE_VECTOR2;

ENVVAR_DATA_ SomeEnvVarData: 399;

CM_ BO_ 1840 "Some Message comment";
CM_ SG_ 1840 Signal_4 "asaklfjlsdfjlsdfgls
HH?=(%)/&KKDKFSDKFKDFKSDFKSDFNKCnvsdcvsvxkcv";
CM_ SG_ 5 TestSigLittleUnsigned1 "asaklfjlsdfjlsdfgls
=0943503450KFSDKFKDFKSDFKSDFNKCnvsdcvsvxkcv";
'''

_DEFAULTS = '''
BA_DEF_DEF_ "BusType" "AS";
'''

_VALUES = '''
BA_ "Attr" BO_ 2684354559 283;
BA_ "Attr" BO_ 2204433193 344;
'''

_TAIL = '''
VAL_ 2000 Signal_3 255 "NOP";

SIG_VALTYPE_ 2000 Signal_8 : 1;
'''

# As written by a DBC editor: leading blank line, BA_DEF_DEF_ before BA_
SAMPLE_DBC = "\n" + _HEADER + _MESSAGES + _DEFAULTS + _VALUES + _TAIL + "\n"

# What generate_dbc renders for SAMPLE_DBC
CANONICAL_SAMPLE_DBC = _HEADER + _MESSAGES + _VALUES + _DEFAULTS + _TAIL


@pytest.fixture
def settings():
    """Settings independent of the environment running the tests."""
    return DbcSettings()


@pytest.fixture
def parser(settings):
    return DbcParser(settings=settings)


@pytest.fixture
def sample_dbc():
    return SAMPLE_DBC


@pytest.fixture
def canonical_sample_dbc():
    return CANONICAL_SAMPLE_DBC


@pytest.fixture
def sample_document(parser):
    return parser.parse_and_transform(SAMPLE_DBC)
