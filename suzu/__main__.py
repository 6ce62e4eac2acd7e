from suzu.cli import main

raise SystemExit(main())
