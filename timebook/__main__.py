from timebook.cli import main

raise SystemExit(main())
