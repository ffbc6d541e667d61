from imgds.cli import main

raise SystemExit(main())
