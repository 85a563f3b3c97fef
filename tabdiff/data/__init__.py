from tabdiff.data import error
from tabdiff.data.canonical_value import *
from tabdiff.data.column import *
from tabdiff.data.column_type import *
from tabdiff.data.compare_rows import *
from tabdiff.data.compare_schemas import *
from tabdiff.data.config import *
from tabdiff.data.datasource import *
from tabdiff.data.datasource_config import *
from tabdiff.data.datasource_type import *
from tabdiff.data.diff import *
from tabdiff.data.error import *
from tabdiff.data.generic_value import *
from tabdiff.data.normalize import *
from tabdiff.data.row import *
from tabdiff.data.schema import *
from tabdiff.data.schema_delta import *
