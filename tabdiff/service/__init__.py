from tabdiff.service.diff import *
from tabdiff.service.dump import *
from tabdiff.service.fetch import *
from tabdiff.service.generate_schema import *
from tabdiff.service.schema_diff import *
