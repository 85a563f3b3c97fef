from tabdiff.adapter import config, datasource, fs, report, schema_file
