from curlcase.cli import main

main()
