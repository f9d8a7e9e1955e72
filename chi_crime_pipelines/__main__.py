from chi_crime_pipelines.report.report_master import main

main()
